"""
Search Contracts - Interfaces for search domain.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

from lexicon.domains.entries import Entry, EntryKind

from .models import RuleMatch, ScoredEntry

# entry -> field value (text, list of texts, or None when absent)
FieldExtractor = Callable[[Entry], "str | list[str] | None"]

# (field value, query) -> matched
Matcher = Callable[[str, str], bool]


@runtime_checkable
class Ranker(Protocol):
    """Contract for relevance ranking implementations."""

    def score(self, entry: Entry, query: str) -> int:
        """Score one entry against a query."""
        ...

    def breakdown(self, entry: Entry, query: str) -> list[RuleMatch]:
        """Explain one entry's score rule by rule."""
        ...

    def rank(
        self,
        entries: Sequence[Entry],
        query: str,
        explain: bool = False,
    ) -> list[ScoredEntry]:
        """Score and sort entries, best first."""
        ...


@runtime_checkable
class EntryStore(Protocol):
    """Contract for the candidate store feeding the ranker."""

    async def list_entries(
        self,
        kind: EntryKind | None = None,
        tags: Sequence[str] | None = None,
        letter: str | None = None,
    ) -> list[Entry]:
        """Return every entry passing the filters, in a stable order."""
        ...

    async def get_entry(self, entry_id: int) -> Entry | None:
        """Fetch a single entry."""
        ...
