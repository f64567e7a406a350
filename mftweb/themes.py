"""User interface theme preferences."""

from __future__ import annotations

VALID_THEMES = frozenset({"light", "dark", "system"})
THEME_COOKIE_MAX_AGE = 60 * 60 * 24 * 365


def validate_theme(theme: str) -> str:
    """Return the theme if it is one of the supported values, else raise ValueError."""
    if theme not in VALID_THEMES:
        raise ValueError(f"invalid theme: {theme!r}")
    return theme