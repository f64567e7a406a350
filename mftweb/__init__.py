"""Framework-independent request logic for a managed file transfer web interface: error pages, path checks, pagination, form parsing, audit records and SQLite backups."""

__version__ = "0.1.0"