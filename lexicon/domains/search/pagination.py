"""
Pagination - Slice a ranked list after scoring.
"""

from __future__ import annotations

from collections.abc import Sequence

from lexicon.config.errors import PaginationError

from .models import MAX_PAGE_SIZE, Page, ScoredEntry

__all__ = ["page_size", "paginate"]


def paginate(items: Sequence[ScoredEntry], offset: int = 0, limit: int = 30) -> Page:
    """
    Return ``limit`` items starting at ``offset``.

    ``total`` is always the length of the full list, not of the page. An offset
    past the end yields an empty page.

    Raises:
        PaginationError: If offset is negative or limit is below 1
    """
    if offset < 0:
        raise PaginationError("Offset must be >= 0", details={"offset": offset})
    if limit < 1:
        raise PaginationError("Limit must be >= 1", details={"limit": limit})

    return Page(
        items=list(items[offset : offset + limit]),
        total=len(items),
        offset=offset,
        limit=limit,
    )


def page_size(requested: int | None, default: int, maximum: int) -> int:
    """Resolve a page size from a request and configured bounds, capped at MAX_PAGE_SIZE."""
    return min(requested or default, maximum, MAX_PAGE_SIZE)
