"""
Search Domain - Rule-based relevance ranking over lexicon entries.

This domain handles:
- Field extraction per priority tier
- Case-insensitive match predicates (exact, prefix, word, substring)
- Ordered rule table with quadratic weights
- Stable ranking and pagination
"""

from .contracts import EntryStore, FieldExtractor, Matcher, Ranker
from .models import (
    MAX_PAGE_SIZE,
    Page,
    RuleMatch,
    ScoredEntry,
    ScoreExplanation,
    SearchRequest,
    SearchResponse,
)
from .pagination import page_size, paginate
from .ranker import RelevanceRanker
from .rules import DEFAULT_RULES, Rule, RuleTable
from .service import SearchService, default_order

__all__ = [
    # Contracts
    "Ranker",
    "EntryStore",
    "FieldExtractor",
    "Matcher",
    # Models
    "SearchRequest",
    "SearchResponse",
    "ScoredEntry",
    "RuleMatch",
    "Page",
    "ScoreExplanation",
    "MAX_PAGE_SIZE",
    # Implementations
    "Rule",
    "RuleTable",
    "DEFAULT_RULES",
    "RelevanceRanker",
    "paginate",
    "page_size",
    "SearchService",
    "default_order",
]
