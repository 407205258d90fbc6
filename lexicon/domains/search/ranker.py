"""
Relevance Ranker - Score entries against a query with an ordered rule table.

Features:
- Cumulative scoring: every matching rule adds its weight
- Stable ordering: equal scores keep input order
- Optional per-rule breakdown for diagnostics
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from operator import attrgetter

from lexicon.domains.entries import Entry

from .models import RuleMatch, ScoredEntry
from .rules import DEFAULT_RULES, RuleTable

logger = logging.getLogger(__name__)

__all__ = ["RelevanceRanker"]


def _normalize_query(query: str | None) -> str:
    return query.strip() if query else ""


class RelevanceRanker:
    """
    Pure, synchronous ranker over an already-fetched candidate set.

    Example:
        >>> from lexicon.domains.entries import Word
        >>> ranker = RelevanceRanker()
        >>> ranked = ranker.rank([Word(name="luck")], "luck")
        >>> ranked[0].score
        230
    """

    def __init__(self, rules: RuleTable = DEFAULT_RULES) -> None:
        self._rules = rules

    @property
    def rules(self) -> RuleTable:
        return self._rules

    @property
    def max_score(self) -> int:
        return self._rules.max_score

    def score(self, entry: Entry, query: str) -> int:
        """
        Sum the weights of every rule matching the entry.

        Returns 0 for an empty or whitespace-only query without evaluating
        any rule.
        """
        needle = _normalize_query(query)
        if not needle:
            return 0

        return sum(
            self._rules.weight(index)
            for index, rule in enumerate(self._rules)
            if rule.matches(entry, needle)
        )

    def breakdown(self, entry: Entry, query: str) -> list[RuleMatch]:
        """Evaluate each rule separately; empty for an empty query."""
        needle = _normalize_query(query)
        if not needle:
            return []

        matches = []
        for index, rule in enumerate(self._rules):
            weight = self._rules.weight(index)
            matched = rule.matches(entry, needle)
            matches.append(
                RuleMatch(
                    rule=rule.name,
                    index=index,
                    weight=weight,
                    matched=matched,
                    score=weight if matched else 0,
                )
            )
        return matches

    def rank(
        self,
        entries: Sequence[Entry],
        query: str,
        explain: bool = False,
    ) -> list[ScoredEntry]:
        """
        Score every entry and sort by score descending.

        Args:
            entries: Full candidate set (never a pre-paginated subset)
            query: Free-text query
            explain: Attach the per-rule breakdown to each result

        Returns:
            Scored entries, best first, ties in input order
        """
        scored = []
        for entry in entries:
            if explain:
                breakdown = self.breakdown(entry, query)
                score = sum(m.score for m in breakdown)
                scored.append(ScoredEntry(entry=entry, score=score, breakdown=breakdown))
            else:
                scored.append(ScoredEntry(entry=entry, score=self.score(entry, query)))

        # sorted() is stable, including with reverse=True
        ranked = sorted(scored, key=attrgetter("score"), reverse=True)

        logger.debug(
            "Ranked %d entries for query='%s' (top score=%d)",
            len(ranked),
            _normalize_query(query)[:50],
            ranked[0].score if ranked else 0,
        )
        return ranked
