"""Transfer jobs and the form fields that create or edit them."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Mapping, Sequence, Union

from mftweb.config_form import TransferConfig, is_checked

logger = logging.getLogger(__name__)

FormValue = Union[str, Sequence[str]]
Form = Mapping[str, FormValue]
ConfigLookup = Callable[[int], Union[TransferConfig, None]]

_UINT_RE = re.compile(r"[0-9]+")
_UINT32_LIMIT = 1 << 32

NO_CONFIG_SELECTED = "At least one configuration must be selected"
INVALID_ORDER_FORMAT = "Invalid configuration ID format in order"
INVALID_ID_FORMAT = "Invalid configuration ID format"
INVALID_CONFIG = "Invalid configuration selected"
NO_PERMISSION = "You do not have permission to use this configuration"


class JobFormError(ValueError):
    """Raised when submitted job data is rejected; status is the HTTP code to answer with."""

    def __init__(self, message: str, status: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


@dataclass(frozen=True)
class JobSettings:
    """The on/off switches of a job."""

    enabled: bool = False
    webhook_enabled: bool = False
    notify_on_success: bool = False
    notify_on_failure: bool = False


@dataclass
class Job:
    """A scheduled run of one or more transfer configurations."""

    id: int = 0
    name: str = ""
    schedule: str = ""
    config_id: int = 0
    config_ids: list[int] = field(default_factory=list)
    enabled: bool = False
    webhook_enabled: bool = False
    notify_on_success: bool = False
    notify_on_failure: bool = False
    created_by: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_run: datetime | None = None
    next_run: datetime | None = None

    @property
    def settings(self) -> JobSettings:
        """The job's switches as one value."""
        return JobSettings(
            enabled=self.enabled,
            webhook_enabled=self.webhook_enabled,
            notify_on_success=self.notify_on_success,
            notify_on_failure=self.notify_on_failure,
        )


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


def _parse_config_id(text: str, message: str) -> int:
    if not _UINT_RE.fullmatch(text) or int(text) >= _UINT32_LIMIT:
        raise JobFormError(message)
    return int(text)


def _find(lookup: ConfigLookup, config_id: int) -> TransferConfig:
    try:
        config = lookup(config_id)
    except LookupError:
        config = None
    if config is None:
        raise JobFormError(INVALID_CONFIG)
    return config


def _check_access(config: TransferConfig, user_id: int, is_admin: bool) -> None:
    if config.created_by != user_id and not is_admin:
        raise JobFormError(NO_PERMISSION, status=403)


def parse_config_ids(
    form: Form, lookup: ConfigLookup, user_id: int, is_admin: bool
) -> list[int]:
    """Return the selected configuration IDs in run order.

    The explicit "config_order" field takes precedence over the order of the
    "config_ids[]" checkboxes. Each configuration must exist and belong to the
    user unless the user is an administrator.
    """
    selected = _values(form, "config_ids[]")
    if not selected:
        raise JobFormError(NO_CONFIG_SELECTED)

    order = _first(form, "config_order")
    if order:
        texts, message = order.split(","), INVALID_ORDER_FORMAT
    else:
        logger.debug("No config_order found, using checkbox order")
        texts, message = selected, INVALID_ID_FORMAT

    config_ids: list[int] = []
    for text in texts:
        config_id = _parse_config_id(text, message)
        _check_access(_find(lookup, config_id), user_id, is_admin)
        config_ids.append(config_id)
    return config_ids


def parse_job_settings(form: Form) -> JobSettings:
    """Read the job's checkboxes, accepting "on" or "true" as ticked."""
    return JobSettings(
        enabled=is_checked(_first(form, "enabled")),
        webhook_enabled=is_checked(_first(form, "webhook_enabled")),
        notify_on_success=is_checked(_first(form, "notify_on_success")),
        notify_on_failure=is_checked(_first(form, "notify_on_failure")),
    )


def display_job_name(job_id: int, name: str, config_name: str | None) -> str:
    """Name to show for a job: its own, else its config's, else "Job #<id>".

    config_name is None when the job's configuration could not be found.
    """
    if name:
        return name
    if config_name is not None:
        return config_name
    return f"Job #{job_id}"