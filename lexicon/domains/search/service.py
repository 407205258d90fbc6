"""
Search Service - Candidate fetch, ranking and pagination for one request.

Filtering (kind, tags, letter) happens in the store; the ranker always sees
the full filtered candidate set and pagination runs last.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from lexicon.config.errors import NotFoundError
from lexicon.domains.entries import Entry

from .contracts import EntryStore, Ranker
from .extractors import primary_text
from .models import ScoredEntry, ScoreExplanation, SearchRequest, SearchResponse
from .pagination import paginate
from .ranker import RelevanceRanker

logger = logging.getLogger(__name__)

__all__ = ["SearchService", "default_order"]


def default_order(entries: Sequence[Entry]) -> list[ScoredEntry]:
    """Alphabetical by primary text with score 0; ties keep store order."""
    ordered = sorted(entries, key=lambda e: (primary_text(e) or "").casefold())
    return [ScoredEntry(entry=entry, score=0) for entry in ordered]


class SearchService:
    """
    Search over the lexicon store.

    Example:
        >>> service = SearchService(repo)
        >>> response = await service.search(SearchRequest(query="serendipity"))
    """

    def __init__(self, store: EntryStore, ranker: Ranker | None = None) -> None:
        """
        Initialize search service.

        Args:
            store: Candidate store applying kind/tag/letter filters
            ranker: Relevance ranker (default rule table when omitted)
        """
        self._store = store
        self._ranker = ranker or RelevanceRanker()

    async def search(self, request: SearchRequest) -> SearchResponse:
        """
        Execute a search.

        Args:
            request: Query, filters and page bounds

        Returns:
            Page of scored results with the full match count
        """
        candidates = await self._store.list_entries(
            kind=request.kind,
            tags=request.tags or None,
            letter=request.letter,
        )

        if request.query.strip():
            ranked = self._ranker.rank(candidates, request.query, explain=request.explain)
        else:
            ranked = default_order(candidates)

        page = paginate(ranked, offset=request.offset, limit=request.limit)

        logger.info(
            "Search: query='%s' kind=%s tags=%s -> %d candidates, page of %d",
            request.query[:50],
            request.kind.value if request.kind else None,
            request.tags,
            page.total,
            len(page.items),
        )

        return SearchResponse(
            results=page.items,
            total=page.total,
            limit=page.limit,
            offset=page.offset,
            query=request.query,
        )

    async def explain(self, entry_id: int, query: str) -> ScoreExplanation:
        """
        Break down one stored entry's score for a query.

        Raises:
            NotFoundError: If no entry has ``entry_id``
        """
        entry = await self._store.get_entry(entry_id)
        if entry is None:
            raise NotFoundError(f"Entry {entry_id} not found", details={"id": entry_id})

        rules = self._ranker.breakdown(entry, query)
        return ScoreExplanation(
            entry=entry,
            query=query,
            total=sum(m.score for m in rules),
            max_score=self._ranker.max_score,
            rules=rules,
        )
