"""
Entries Domain - The four lexicon record kinds.

This domain handles:
- Word, Phrase, Quote and Hypothetical models
- Discriminated-union parsing of raw payloads
"""

from .models import (
    BaseEntry,
    Entry,
    EntryKind,
    Hypothetical,
    Phrase,
    Quote,
    Word,
    parse_entry,
)

__all__ = [
    "BaseEntry",
    "Entry",
    "EntryKind",
    "Word",
    "Phrase",
    "Quote",
    "Hypothetical",
    "parse_entry",
]
