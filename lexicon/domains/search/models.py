"""
Search Models - Data types for search domain.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from lexicon.domains.entries import Entry, EntryKind

MAX_PAGE_SIZE = 100


class SearchRequest(BaseModel):
    """Search request; an empty query lists candidates in default order."""

    query: str = ""
    kind: EntryKind | None = None
    tags: list[str] = Field(default_factory=list)
    letter: str | None = None
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=30, ge=1, le=MAX_PAGE_SIZE)
    explain: bool = False

    model_config = {"frozen": True}


class RuleMatch(BaseModel):
    """Outcome of one rule for one entry."""

    rule: str
    index: int
    weight: int
    matched: bool
    score: int = 0


class ScoredEntry(BaseModel):
    """Entry with its relevance score attached."""

    entry: Entry
    score: int = Field(default=0, ge=0)
    breakdown: list[RuleMatch] | None = None

    def to_result(self) -> dict[str, Any]:
        """Flatten into the entry's attributes plus ``score``."""
        result = self.entry.model_dump(mode="json")
        result["score"] = self.score
        if self.breakdown is not None:
            result["matched_rules"] = [m.rule for m in self.breakdown if m.matched]
        return result


class Page(BaseModel):
    """One slice of a ranked list."""

    items: list[ScoredEntry]
    total: int
    offset: int
    limit: int


class SearchResponse(BaseModel):
    """Search results for one request."""

    results: list[ScoredEntry]
    total: int
    limit: int
    offset: int
    query: str


class ScoreExplanation(BaseModel):
    """Per-rule breakdown of one entry's score."""

    entry: Entry
    query: str
    total: int
    max_score: int
    rules: list[RuleMatch]
