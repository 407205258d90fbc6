"""
Match Predicates - Compare one field value against the query.

All predicates are case-insensitive (Unicode casefolding). Ordered from
strict to loose: exact, prefix, word, substring.
"""

from __future__ import annotations

import re
from functools import lru_cache

__all__ = [
    "exact_match",
    "prefix_match",
    "word_match",
    "substring_match",
]


def exact_match(field: str, query: str) -> bool:
    """Field equals query. No trimming is applied."""
    return field.casefold() == query.casefold()


def prefix_match(field: str, query: str) -> bool:
    """Field starts with query."""
    return field.casefold().startswith(query.casefold())


@lru_cache(maxsize=256)
def _word_pattern(query: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(query)}\b")


def word_match(field: str, query: str) -> bool:
    """Query occurs in field as a whole token; metacharacters match literally."""
    return _word_pattern(query.casefold()).search(field.casefold()) is not None


def substring_match(field: str, query: str) -> bool:
    """Field contains query anywhere."""
    return query.casefold() in field.casefold()
