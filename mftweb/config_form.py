"""Transfer configurations and the form fields that edit them."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Mapping, Sequence, Union

logger = logging.getLogger(__name__)

FormValue = Union[str, Sequence[str]]
Form = Mapping[str, FormValue]

DEFAULT_COMMAND_ID = 1
FLAG_VALUE_PREFIX = "flag_value_"
FLAG_ENABLE_PREFIX = "flag_enable_"

_UINT_RE = re.compile(r"[0-9]+")
_UINT64_LIMIT = 1 << 64

# Checkbox fields on the form and the config attributes they set.
_CHECKBOX_FIELDS = (
    "skip_processed_files",
    "archive_enabled",
    "delete_after_transfer",
    "source_passive_mode",
    "dest_passive_mode",
    "dest_read_only",
    "source_read_only",
    "dest_include_archived",
    "source_include_archived",
    "use_builtin_auth_source",
    "use_builtin_auth_dest",
)

# Plain text fields bound straight from the form when present.
_TEXT_FIELDS = (
    "name",
    "source_type",
    "source_path",
    "destination_type",
    "destination_path",
)


class ConfigFormError(ValueError):
    """Raised when a form value cannot be turned into config data."""


@dataclass
class TransferConfig:
    """A file transfer configuration."""

    id: int = 0
    name: str = ""
    source_type: str = ""
    source_path: str = ""
    destination_type: str = ""
    destination_path: str = ""
    created_by: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    skip_processed_files: bool | None = None
    archive_enabled: bool | None = None
    delete_after_transfer: bool | None = None
    source_passive_mode: bool | None = None
    dest_passive_mode: bool | None = None
    dest_read_only: bool | None = None
    source_read_only: bool | None = None
    dest_include_archived: bool | None = None
    source_include_archived: bool | None = None
    use_builtin_auth_source: bool | None = None
    use_builtin_auth_dest: bool | None = None
    command_id: int = 0
    command_flags: str = ""
    command_flag_values: str = ""
    google_drive_authenticated: bool | None = None


def _values(form: Form, key: str) -> list[str]:
    value = form.get(key)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def _first(form: Form, key: str) -> str:
    values = _values(form, key)
    return values[0] if values else ""


def _parse_uint(value: str) -> int:
    if not _UINT_RE.fullmatch(value) or int(value) >= _UINT64_LIMIT:
        raise ConfigFormError(f"invalid unsigned integer: {value!r}")
    return int(value)


def _to_json(data: object) -> str:
    text = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return (
        text.replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


def is_checked(value: str | None) -> bool:
    """A checkbox counts as ticked when its value is "on" or "true"."""
    return value in ("on", "true")


def parse_command_id(value: str | None) -> int:
    """Parse the command ID; an empty value means the default copy command."""
    if not value:
        return DEFAULT_COMMAND_ID
    try:
        return _parse_uint(value)
    except ConfigFormError as exc:
        raise ConfigFormError(f"invalid command ID: {value!r}") from exc


def parse_command_flags(values: Sequence[str]) -> str | None:
    """Encode the selected flag IDs as a JSON list, skipping invalid ones.

    Returns None when no flags were submitted at all.
    """
    if not values:
        return None
    flag_ids: list[int] = []
    for raw in values:
        try:
            flag_ids.append(_parse_uint(raw))
        except ConfigFormError:
            logger.warning("Error parsing flag ID: %r", raw)
    return _to_json(flag_ids)


def parse_flag_values(form: Form) -> dict[int, str]:
    """Collect values of flags whose enable checkbox is "on" and whose value is set."""
    flag_values: dict[int, str] = {}
    for key in form:
        if not key.startswith(FLAG_VALUE_PREFIX):
            continue
        id_text = key[len(FLAG_VALUE_PREFIX):]
        try:
            flag_id = _parse_uint(id_text)
        except ConfigFormError:
            logger.warning("Error parsing flag value ID: %r", id_text)
            continue
        values = _values(form, key)
        if _first(form, FLAG_ENABLE_PREFIX + id_text) == "on" and values and values[0]:
            flag_values[flag_id] = values[0]
    return flag_values


def _encode_flag_values(flag_values: Mapping[int, str]) -> str:
    ordered = {str(k): flag_values[k] for k in sorted(flag_values, key=str)}
    return _to_json(ordered)


def apply_config_form(config: TransferConfig, form: Form) -> TransferConfig:
    """Return a copy of the config with the submitted form fields applied.

    Text fields are taken when present; every checkbox is set from the form.
    An unparsable command ID leaves the existing one in place. Flags and flag
    values are only replaced when the form supplies some.
    """
    changes: dict[str, object] = {
        name: _first(form, name) for name in _TEXT_FIELDS if name in form
    }
    changes.update({name: is_checked(_first(form, name)) for name in _CHECKBOX_FIELDS})

    try:
        changes["command_id"] = parse_command_id(_first(form, "command_id"))
    except ConfigFormError as exc:
        logger.warning("Error parsing command ID: %s", exc)

    flags = parse_command_flags(_values(form, "command_flags"))
    if flags is not None:
        changes["command_flags"] = flags

    flag_values = parse_flag_values(form)
    if flag_values:
        changes["command_flag_values"] = _encode_flag_values(flag_values)

    return replace(config, **changes)