"""
Field Extractors - Pull the text relevant to one priority tier out of an entry.

Tiers:
    1 (highest): word name, phrase/quote/hypothetical body
    2: word/phrase definition, tags
    3 (lowest): notes (all kinds), quote source

Extractors never raise; a missing attribute yields ``None``.
"""

from __future__ import annotations

from typing import assert_never

from lexicon.domains.entries import Entry, Hypothetical, Phrase, Quote, Word

__all__ = [
    "primary_text",
    "definition_text",
    "tag_values",
    "notes_text",
    "quote_source",
]


def primary_text(entry: Entry) -> str | None:
    """Return the text that defines the entry (name or body)."""
    if isinstance(entry, Word):
        return getattr(entry, "name", None)
    if isinstance(entry, (Phrase, Quote, Hypothetical)):
        return getattr(entry, "body", None)
    assert_never(entry)


def definition_text(entry: Entry) -> str | None:
    """Return the definition for words and phrases."""
    if isinstance(entry, (Word, Phrase)):
        return entry.definition
    return None


def tag_values(entry: Entry) -> list[str]:
    """Return the entry's tags."""
    return entry.tags


def notes_text(entry: Entry) -> str | None:
    """Return notes when the variant defines them."""
    return getattr(entry, "notes", None)


def quote_source(entry: Entry) -> str | None:
    """Return the source of a quote; other kinds have none for ranking."""
    if isinstance(entry, Quote):
        return entry.source
    return None
