"""Rclone command catalogue helpers."""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable

_UINT_RE = re.compile(r"[0-9]+")
_UINT64_LIMIT = 1 << 64


@dataclass
class RcloneFlag:
    """A flag accepted by an rclone command."""

    id: int = 0
    name: str = ""
    description: str = ""
    data_type: str = ""


@dataclass
class RcloneCommand:
    """An rclone command with its category and flags."""

    id: int = 0
    name: str = ""
    description: str = ""
    category: str = ""
    flags: list[RcloneFlag] = field(default_factory=list)


def group_commands_by_category(
    commands: Iterable[RcloneCommand],
) -> dict[str, list[RcloneCommand]]:
    """Group commands under their category, keeping their order within each."""
    groups: dict[str, list[RcloneCommand]] = defaultdict(list)
    for command in commands:
        groups[command.category].append(command)
    return dict(groups)


def sort_flags(flags: Iterable[RcloneFlag]) -> list[RcloneFlag]:
    """Return the flags sorted alphabetically by name."""
    return sorted(flags, key=lambda flag: flag.name)


def parse_command_id(value: str | None) -> int:
    """Parse a command ID, raising ValueError when it is missing or not a number."""
    if not value:
        raise ValueError("Command ID is required")
    if not _UINT_RE.fullmatch(value) or int(value) >= _UINT64_LIMIT:
        raise ValueError("Invalid command ID")
    return int(value)