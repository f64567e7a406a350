# mftweb

`mftweb` holds the request-handling logic behind the web interface of a managed
file transfer service. It is not tied to any web framework. Each module takes
plain values, such as form fields, query strings, paths and records, and either
returns a result or raises an exception. Routes that use it can stay thin.

It uses only the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `mftweb.errors`

`ErrorPage` is a frozen dataclass with the fields `code`, `title`, `message`
and `details`. The following functions build one:

- `error_page(code, title, message, err=None)`: `details` holds the text of `err`.
- `not_found(title="", message="")`: a 404. An empty title falls back to
  "Page Not Found", and an empty message falls back to a default message.
- `bad_request(title, message)`: a 400.
- `server_error(err=None)`: a 500 that carries the error text as details.
- `method_not_allowed(method)`: a 405 whose message names the method.
- `recovered_error(recovered)`: turns any caught value into a 500. Values that
  are not exceptions are converted to text first.

### `mftweb.paths`

`check_path(path)` returns a `PathCheck` with the fields `valid`, `error` and
`status`. It reports whether the path exists and is a directory. It also checks
that the directory is writable by creating a temporary file there and then
removing it. An empty path gives status 400. Every other outcome gives 200.

### `mftweb.themes`

`validate_theme(theme)` returns the theme if it is `light`, `dark` or `system`.
Any other value raises `ValueError`.

### `mftweb.pagination`

- `parse_page(value)`: invalid values and values below 1 become 1.
- `parse_per_page(value)`: values other than 10, 25, 50 or 100 become 10.
- `paginate(total, page, per_page)`: returns a `Pagination` with the fields
  `page`, `per_page`, `total`, `total_pages` and `offset`. It always reports at
  least one page, and the requested page is clamped into range.

### `mftweb.backup_names`

- `format_file_size(size)`: formats a byte count with binary units, such as
  `"512 B"` or `"1.5 KB"`.
- `validate_backup_name(name)`: raises `ValueError` if the name is empty or
  contains `..` or `/`.
- `backup_name(prefix, when=None)`: builds a timestamped name such as
  `backup-2024-01-31-120000.db`.

### `mftweb.provider_form`

This module covers authentication providers. It contains `ProviderType`
(`authentik`, `oidc`, `saml`, `oauth2`), the `AuthProvider` dataclass and
`ProviderError`.

- `provider_from_form(form)` builds a provider from submitted form fields.
- `update_provider_from_form(provider, form)` returns an updated copy. It keeps
  the existing client secret and type when the form leaves them empty. It also
  keeps the stored config and attribute mapping when the form supplies none.
- `build_provider_config(provider_type, form)` and
  `build_attribute_mapping(form)` produce compact JSON, or `""` when there is
  nothing to store.
- `check_deletable(provider, identity_count)` raises `ProviderError` while user
  identities still refer to the provider.
- `test_connection(provider)` checks only that the provider type is a supported
  one. It does not contact the provider.

### `mftweb.rclone_commands`

This module contains the `RcloneCommand` and `RcloneFlag` dataclasses and three
functions:

- `group_commands_by_category(commands)`: groups commands by category.
- `sort_flags(flags)`: sorts flags by name.
- `parse_command_id(value)`: raises `ValueError` if the value is missing or is
  not an unsigned number.

### `mftweb.config_form`

This module contains the `TransferConfig` dataclass and `ConfigFormError`.

`apply_config_form(config, form)` returns a copy of the config with these
changes:

- Text fields are applied when they are present.
- Every checkbox is set, and `"on"` or `"true"` counts as checked (see
  `is_checked`).
- The command ID is parsed. An empty value means the default ID 1. A value that
  cannot be parsed leaves the current ID in place.
- The selected flag IDs are encoded as JSON.
- Values are taken for flags whose enable checkbox is `"on"`.

Form values can be strings or sequences of strings. The helpers
`parse_command_id`, `parse_command_flags` and `parse_flag_values` are public.

### `mftweb.job_form`

This module contains the `Job` and `JobSettings` dataclasses and
`JobFormError`. `JobFormError` carries an HTTP `status`, which is 400 or 403.

- `parse_config_ids(form, lookup, user_id, is_admin)` returns the selected
  configuration IDs in run order. A `config_order` field takes precedence over
  the `config_ids[]` checkboxes. Each configuration is checked to exist, using
  `lookup`, and to belong to the user unless `is_admin` is true.
- `parse_job_settings(form)` reads the job's checkboxes.
- `display_job_name(job_id, name, config_name)` picks the job's own name, then
  the config's name, then `Job #<id>`.

### `mftweb.records`

This module contains `AuditEntry` and these functions:

- `config_audit_details(config)` and `job_audit_details(name, schedule, settings, config_ids)`
  build the detail dictionaries for audit entries.
- `duplicate_config(config, user_id)` and `duplicate_job(job)` return unsaved
  copies with `" - Copy"` appended to the name and the ID reset to 0. Duplicated
  jobs have their run times cleared.

### `mftweb.backups`

- `copy_file(src, dst)` copies a file.
- `backup_database_file(src, dst)` copies a database file, together with its
  `-wal` and `-shm` files when they are present.

`BackupManager(db_path, backup_dir)` works on one SQLite file. It raises
`BackupError` on failure. Its methods are:

- `list_backups()`: returns the `.db` files as `BackupFile` values, newest
  first.
- `create_backup(prefix="backup")`: makes a timestamped copy and returns its
  name.
- `restore(filename)`: saves a `pre-restore-…` copy first and returns its name.
  Uploaded files named `temp-…` are removed after the restore.
- `delete(filename)`: deletes a backup.
- `download_path(filename)`: returns the path of a backup. It refuses names
  that contain `..` or `/`.
- `vacuum()`: backs up the database, then runs `VACUUM`.
- `clear_job_history()`: backs up the database, then deletes `job_histories`
  rows older than 30 days and returns the number deleted.

## Example

```python
from mftweb.pagination import paginate, parse_page, parse_per_page
from mftweb.backups import BackupManager

page = paginate(total=42, page=parse_page("7"), per_page=parse_per_page("25"))
print(page.page, page.total_pages)  # 2 2

manager = BackupManager(db_path="data/app.db", backup_dir="data/backups")
created = manager.create_backup()
for backup in manager.list_backups():
    print(backup.name, backup.size)
```

## What this package does not do

This package does not provide:

- A web server, routes, templates or HTML rendering.
- A command-line program.
- A data model or storage layer for users, jobs, configs, notifications or
  providers. Callers load and save records themselves and pass in lookups.
- A job scheduler.
- An rclone runner, or configuration-file generation for rclone.
- Any OAuth flow.

`BackupManager` is the only part that touches storage. It works directly on a
SQLite file.