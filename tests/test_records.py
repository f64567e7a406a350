from datetime import datetime

import pytest

from mftweb.config_form import TransferConfig
from mftweb.job_form import Job, JobSettings
from mftweb.records import (
    AuditEntry,
    config_audit_details,
    duplicate_config,
    duplicate_job,
    job_audit_details,
)


def _config(**overrides):
    values = dict(
        id=7,
        name="Nightly",
        source_type="local",
        source_path="/data/in",
        destination_type="sftp",
        destination_path="/remote/out",
        created_by=3,
        skip_processed_files=True,
        archive_enabled=False,
        delete_after_transfer=True,
        source_passive_mode=False,
        dest_passive_mode=True,
        dest_read_only=None,
        source_read_only=True,
    )
    values.update(overrides)
    return TransferConfig(**values)


def test_config_audit_details_fields():
    details = config_audit_details(_config())
    assert details == {
        "name": "Nightly",
        "source_type": "local",
        "dest_type": "sftp",
        "source_path": "/data/in",
        "dest_path": "/remote/out",
        "skip_processed_files": True,
        "archive_enabled": False,
        "delete_after_transfer": True,
        "source_passive_mode": False,
        "dest_passive_mode": True,
    }


@pytest.mark.parametrize(
    "missing",
    [
        "skip_processed_files",
        "archive_enabled",
        "delete_after_transfer",
        "source_passive_mode",
        "dest_passive_mode",
    ],
)
def test_config_audit_details_requires_switches(missing):
    with pytest.raises(ValueError):
        config_audit_details(_config(**{missing: None}))


def test_duplicate_config_resets_identity():
    original = _config()
    before = datetime.now()
    copy = duplicate_config(original, 11)
    after = datetime.now()
    assert copy.id == 0
    assert copy.name == "Nightly - Copy"
    assert copy.created_by == 11
    assert before <= copy.created_at <= after
    assert copy.updated_at == copy.created_at


def test_duplicate_config_keeps_settings_and_leaves_original():
    original = _config()
    copy = duplicate_config(original, 11)
    assert copy.source_path == original.source_path
    assert copy.destination_type == original.destination_type
    assert copy.source_read_only is True
    assert copy.dest_read_only is None
    assert config_audit_details(copy)["skip_processed_files"] is True
    assert original.id == 7
    assert original.name == "Nightly"
    assert original.created_by == 3


def test_duplicate_config_requires_switches():
    with pytest.raises(ValueError):
        duplicate_config(_config(archive_enabled=None), 1)


def test_job_audit_details():
    settings = JobSettings(enabled=True, notify_on_failure=True)
    details = job_audit_details("Backup", "0 * * * *", settings, (4, 2))
    assert details == {
        "name": "Backup",
        "schedule": "0 * * * *",
        "enabled": True,
        "config_ids": [4, 2],
        "webhook_enabled": False,
        "notify_on_success": False,
        "notify_on_failure": True,
    }


def test_job_audit_details_from_job_settings():
    job = Job(name="J", webhook_enabled=True, notify_on_success=True)
    details = job_audit_details(job.name, job.schedule, job.settings, job.config_ids)
    assert details["webhook_enabled"] is True
    assert details["notify_on_success"] is True
    assert details["enabled"] is False
    assert details["config_ids"] == []


def test_duplicate_job():
    run = datetime(2024, 1, 2, 3, 4, 5)
    original = Job(
        id=5,
        name="Sync",
        schedule="@daily",
        config_id=2,
        config_ids=[2, 9],
        enabled=True,
        created_by=8,
        last_run=run,
        next_run=run,
    )
    copy = duplicate_job(original)
    assert copy.id == 0
    assert copy.name == "Sync - Copy"
    assert copy.last_run is None
    assert copy.next_run is None
    assert copy.config_ids == [2, 9]
    assert copy.config_id == 2
    assert copy.created_by == 8
    assert copy.settings == original.settings
    copy.config_ids.append(1)
    assert original.config_ids == [2, 9]
    assert original.last_run == run


def test_audit_entry_defaults():
    before = datetime.now()
    entry = AuditEntry(action="create", entity_type="job", entity_id=3, user_id=1)
    assert entry.details == {}
    assert before <= entry.timestamp <= datetime.now()
    other = AuditEntry(action="delete", entity_type="config", entity_id=4, user_id=1)
    other.details["name"] = "x"
    assert entry.details == {}