"""Naming and size formatting for database backup files."""

from __future__ import annotations

from datetime import datetime

TIMESTAMP_FORMAT = "%Y-%m-%d-%H%M%S"
_UNITS = "KMGTPE"


def format_file_size(size: int) -> str:
    """Format a byte count with binary units, e.g. "1.5 KB"."""
    unit = 1024
    if size < unit:
        return f"{size} B"
    div, exp = unit, 0
    n = size // unit
    while n >= unit:
        div *= unit
        exp += 1
        n //= unit
    return f"{size / div:.1f} {_UNITS[exp]}B"


def validate_backup_name(name: str) -> str:
    """Return the name if it is a plain file name, else raise ValueError."""
    if not name:
        raise ValueError("no backup file specified")
    if ".." in name or "/" in name:
        raise ValueError("the filename contains invalid characters")
    return name


def backup_name(prefix: str, when: datetime | None = None) -> str:
    """Build a timestamped backup file name such as "backup-2006-01-02-150405.db"."""
    if when is None:
        when = datetime.now()
    return f"{prefix}-{when.strftime(TIMESTAMP_FORMAT)}.db"