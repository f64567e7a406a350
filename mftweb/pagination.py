"""Page number handling for paginated listings."""

from __future__ import annotations

import re
from dataclasses import dataclass

ALLOWED_PAGE_SIZES = (10, 25, 50, 100)
DEFAULT_PAGE_SIZE = 10

_INT_RE = re.compile(r"[+-]?\d+")


def _parse_int(value: str | None) -> int | None:
    if value is None or not _INT_RE.fullmatch(value):
        return None
    return int(value)


@dataclass(frozen=True)
class Pagination:
    """A resolved page within a listing."""

    page: int
    per_page: int
    total: int
    total_pages: int
    offset: int


def parse_page(value: str | None) -> int:
    """Parse a page number; anything invalid or below 1 becomes 1."""
    page = _parse_int(value)
    if page is None or page < 1:
        return 1
    return page


def parse_per_page(value: str | None) -> int:
    """Parse a page size; anything not among the allowed sizes becomes 10."""
    per_page = _parse_int(value)
    if per_page not in ALLOWED_PAGE_SIZES:
        return DEFAULT_PAGE_SIZE
    return per_page


def paginate(total: int, page: int, per_page: int) -> Pagination:
    """Resolve the page count, clamp the page into range and compute the offset."""
    total_pages = max(-(-total // per_page), 1)
    page = max(min(page, total_pages), 1)
    return Pagination(
        page=page,
        per_page=per_page,
        total=total,
        total_pages=total_pages,
        offset=(page - 1) * per_page,
    )