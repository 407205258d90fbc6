"""
API Dependencies - Dependency injection for FastAPI routes.

Provides singleton instances of the repository and search service.
"""

from __future__ import annotations

from functools import lru_cache

from lexicon.adapters.sqlite import EntryRepository
from lexicon.config import get_settings
from lexicon.domains.search import RelevanceRanker, SearchService


@lru_cache
def get_entry_repository() -> EntryRepository:
    """Get entry repository singleton."""
    settings = get_settings()
    return EntryRepository(settings.db_path)


@lru_cache
def get_ranker() -> RelevanceRanker:
    """Get ranker singleton (default rule table)."""
    return RelevanceRanker()


def get_search_service() -> SearchService:
    """Build the search service over the shared repository and ranker."""
    return SearchService(get_entry_repository(), get_ranker())


async def init_services() -> None:
    """
    Initialize services on startup.

    This should be called from the FastAPI lifespan handler.
    """
    repo = get_entry_repository()
    await repo.initialize()


async def cleanup_services() -> None:
    """Cleanup services on shutdown."""
    repo = get_entry_repository()
    await repo.close()
