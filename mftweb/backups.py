"""Database backups, restores and maintenance for the SQLite store."""

from __future__ import annotations

import logging
import os
import shutil
import sqlite3
from contextlib import closing
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from mftweb.backup_names import backup_name, format_file_size, validate_backup_name

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".db"
TEMP_PREFIX = "temp-"
_SIDECAR_SUFFIXES = ("-wal", "-shm")


class BackupError(Exception):
    """Raised when a backup, restore or maintenance step fails."""


@dataclass(frozen=True)
class BackupFile:
    """A backup file found in the backup directory."""

    name: str
    size: str
    created: datetime
    full_path: str


def copy_file(src: str | os.PathLike[str], dst: str | os.PathLike[str]) -> None:
    """Copy a file's contents to dst and flush them to disk."""
    with open(src, "rb") as source, open(dst, "wb") as dest:
        shutil.copyfileobj(source, dest)
        dest.flush()
        os.fsync(dest.fileno())


def backup_database_file(
    src: str | os.PathLike[str], dst: str | os.PathLike[str]
) -> None:
    """Copy a database file, along with its WAL and SHM files when present."""
    try:
        source = open(src, "rb")
    except OSError as exc:
        raise BackupError(f"failed to open source database: {exc}") from exc
    with source:
        try:
            dest = open(dst, "wb")
        except OSError as exc:
            raise BackupError(f"failed to create destination file: {exc}") from exc
        with dest:
            try:
                shutil.copyfileobj(source, dest)
            except OSError as exc:
                raise BackupError(f"failed to copy database: {exc}") from exc

            for suffix in _SIDECAR_SUFFIXES:
                sidecar = f"{os.fspath(src)}{suffix}"
                if os.path.exists(sidecar):
                    try:
                        copy_file(sidecar, f"{os.fspath(dst)}{suffix}")
                    except OSError as exc:
                        logger.warning("failed to copy %s file: %s", suffix[1:].upper(), exc)

            dest.flush()
            os.fsync(dest.fileno())


class BackupManager:
    """Manages backups of one SQLite database file in a backup directory."""

    def __init__(
        self, db_path: str | os.PathLike[str], backup_dir: str | os.PathLike[str]
    ) -> None:
        self.db_path = Path(db_path)
        self.backup_dir = Path(backup_dir)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path, isolation_level=None)

    def _backup(self, prefix: str, failure: str) -> str:
        name = backup_name(prefix)
        try:
            backup_database_file(self.db_path, self.backup_dir / name)
        except BackupError as exc:
            raise BackupError(f"{failure}: {exc}") from exc
        return name

    def _existing(self, filename: str) -> Path:
        try:
            validate_backup_name(filename)
        except ValueError as exc:
            raise BackupError(f"Invalid backup filename: {exc}") from exc
        path = self.backup_dir / filename
        if not path.exists():
            raise BackupError("Backup file not found")
        return path

    def list_backups(self) -> list[BackupFile]:
        """Return the backup files in the directory, newest first."""
        try:
            entries = list(os.scandir(self.backup_dir))
        except OSError as exc:
            raise BackupError(f"Failed to list backup files: {exc}") from exc

        backups = []
        for entry in entries:
            if entry.is_dir() or not entry.name.endswith(BACKUP_SUFFIX):
                continue
            try:
                info = entry.stat()
            except OSError:
                continue
            backups.append(
                BackupFile(
                    name=entry.name,
                    size=format_file_size(info.st_size),
                    created=datetime.fromtimestamp(info.st_mtime),
                    full_path=str(self.backup_dir / entry.name),
                )
            )
        return sorted(backups, key=lambda backup: backup.created, reverse=True)

    def create_backup(self, prefix: str = "backup") -> str:
        """Copy the database into a new timestamped backup and return its name."""
        return self._backup(prefix, "Failed to create backup")

    def restore(self, filename: str) -> str:
        """Replace the database with a backup; return the name of the pre-restore copy.

        A backup whose name starts with "temp-" is an uploaded file and is
        removed once the restore has succeeded.
        """
        if not filename:
            raise BackupError("Invalid backup file")
        source = self.backup_dir / filename
        if not source.exists():
            raise BackupError("Backup file not found")

        saved = self._backup("pre-restore", "Failed to backup current database")

        try:
            copy_file(source, self.db_path)
        except OSError as exc:
            raise BackupError(f"Failed to restore database: {exc}") from exc

        if filename.startswith(TEMP_PREFIX):
            try:
                source.unlink()
            except OSError as exc:
                logger.warning("failed to remove uploaded backup %s: %s", filename, exc)
        return saved

    def delete(self, filename: str) -> None:
        """Delete a backup file."""
        path = self._existing(filename)
        try:
            path.unlink()
        except OSError as exc:
            raise BackupError(f"Failed to delete backup: {exc}") from exc

    def download_path(self, filename: str) -> Path:
        """Return the path of an existing backup file to serve for download."""
        return self._existing(filename)

    def vacuum(self) -> str:
        """Back up the database, then compact it; return the backup's name."""
        saved = self._backup("pre-vacuum", "Failed to backup before vacuum")
        try:
            with closing(self._connect()) as conn:
                conn.execute("VACUUM")
        except sqlite3.Error as exc:
            raise BackupError(f"Database optimization failed: {exc}") from exc
        return saved

    def clear_job_history(self) -> int:
        """Back up the database, then delete job history older than 30 days.

        Returns the number of records deleted.
        """
        self._backup("pre-clear-history", "Failed to backup before clearing history")
        try:
            with closing(self._connect()) as conn:
                try:
                    conn.execute("SELECT COUNT(*) FROM job_histories").fetchone()
                except sqlite3.Error as exc:
                    raise BackupError(
                        f"Failed to verify database connection: {exc}"
                    ) from exc

                (has_created_at,) = conn.execute(
                    "SELECT COUNT(*) FROM pragma_table_info('job_histories') "
                    "WHERE name = 'created_at'"
                ).fetchone()

                if has_created_at:
                    sql = (
                        "DELETE FROM job_histories WHERE start_time < datetime('now', '-30 day')"
                        " OR created_at < datetime('now', '-30 day')"
                    )
                else:
                    sql = "DELETE FROM job_histories WHERE start_time < datetime('now', '-30 day')"
                try:
                    deleted = conn.execute(sql).rowcount
                except sqlite3.Error as exc:
                    raise BackupError(f"Failed to clear job history: {exc}") from exc
        except sqlite3.Error as exc:
            raise BackupError(f"Failed to clear job history: {exc}") from exc

        logger.info("Deleted %d job history records", deleted)
        return deleted