"""Audit log entries and duplicated records for configs and jobs."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Iterable

from mftweb.config_form import TransferConfig
from mftweb.job_form import Job, JobSettings

COPY_SUFFIX = " - Copy"

# Switches every stored config carries; a missing one is a broken record.
_REQUIRED_SWITCHES = (
    "skip_processed_files",
    "archive_enabled",
    "delete_after_transfer",
    "source_passive_mode",
    "dest_passive_mode",
)


@dataclass
class AuditEntry:
    """One entry in the audit log."""

    action: str
    entity_type: str
    entity_id: int
    user_id: int
    details: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)


def _switch(config: TransferConfig, name: str) -> bool:
    value = getattr(config, name)
    if value is None:
        raise ValueError(f"config {config.id} has no value for {name}")
    return value


def config_audit_details(config: TransferConfig) -> dict[str, Any]:
    """Describe a config for the audit log.

    Raises ValueError when one of the config's required switches is unset.
    """
    details: dict[str, Any] = {
        "name": config.name,
        "source_type": config.source_type,
        "dest_type": config.destination_type,
        "source_path": config.source_path,
        "dest_path": config.destination_path,
    }
    details.update({name: _switch(config, name) for name in _REQUIRED_SWITCHES})
    return details


def duplicate_config(config: TransferConfig, user_id: int) -> TransferConfig:
    """Return an unsaved copy of the config owned by the given user.

    Raises ValueError when one of the config's required switches is unset.
    """
    for name in _REQUIRED_SWITCHES:
        _switch(config, name)
    now = datetime.now()
    return replace(
        config,
        id=0,
        name=config.name + COPY_SUFFIX,
        created_at=now,
        updated_at=now,
        created_by=user_id,
    )


def job_audit_details(
    name: str, schedule: str, settings: JobSettings, config_ids: Iterable[int]
) -> dict[str, Any]:
    """Describe a job for the audit log."""
    return {
        "name": name,
        "schedule": schedule,
        "enabled": settings.enabled,
        "config_ids": list(config_ids),
        "webhook_enabled": settings.webhook_enabled,
        "notify_on_success": settings.notify_on_success,
        "notify_on_failure": settings.notify_on_failure,
    }


def duplicate_job(job: Job) -> Job:
    """Return an unsaved copy of the job with its run times cleared."""
    now = datetime.now()
    return replace(
        job,
        id=0,
        name=job.name + COPY_SUFFIX,
        created_at=now,
        updated_at=now,
        last_run=None,
        next_run=None,
        config_ids=list(job.config_ids),
    )