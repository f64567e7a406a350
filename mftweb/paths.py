"""Validation of local directory paths."""

from __future__ import annotations

import os
from dataclasses import dataclass

_PROBE_NAME = ".gomft_test"


@dataclass(frozen=True)
class PathCheck:
    """Outcome of checking a path; status is the HTTP code to answer with."""

    valid: bool
    error: str
    status: int = 200


def check_path(path: str) -> PathCheck:
    """Check that a path exists, is a directory and can be written to."""
    if not path:
        return PathCheck(False, "No path provided", 400)

    try:
        abs_path = os.path.abspath(os.path.normpath(path))
    except (OSError, ValueError):
        return PathCheck(False, "Invalid path format")

    try:
        st_is_dir = os.path.isdir(abs_path)
        os.stat(abs_path)
    except FileNotFoundError:
        return PathCheck(False, "Path does not exist")
    except (OSError, ValueError) as exc:
        return PathCheck(False, f"Error accessing path: {exc}")

    if not st_is_dir:
        return PathCheck(False, "Path exists but is not a directory")

    probe = os.path.join(abs_path, _PROBE_NAME)
    try:
        fd = os.open(probe, os.O_CREAT | os.O_WRONLY, 0o666)
    except OSError:
        return PathCheck(False, "Directory exists but is not writable")
    os.close(fd)
    try:
        os.remove(probe)
    except OSError:
        pass

    return PathCheck(True, "")