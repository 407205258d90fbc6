"""
Search Routes - Ranked lexicon search and score explanations.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from lexicon.config import InvalidTypeError, Settings, get_settings
from lexicon.domains.entries import EntryKind
from lexicon.domains.search import (
    MAX_PAGE_SIZE,
    ScoreExplanation,
    SearchRequest,
    SearchService,
    page_size,
)
from lexicon.interfaces.api.deps import get_search_service

router = APIRouter()


class SearchResultsResponse(BaseModel):
    """Search response; each result is the entry's attributes plus ``score``."""

    results: list[dict[str, Any]]
    total: int
    limit: int
    offset: int
    query: str


def _parse_kind(value: str | None) -> EntryKind | None:
    if not value:
        return None
    try:
        return EntryKind(value)
    except ValueError:
        raise InvalidTypeError(
            "Invalid entry type. Must be one of: "
            + ", ".join(kind.value for kind in EntryKind),
            details={"type": value},
        ) from None


def _parse_tags(value: str | None) -> list[str]:
    if not value:
        return []
    return [tag.strip() for tag in value.split(",") if tag.strip()]


@router.get("", response_model=SearchResultsResponse)
async def search(
    q: str | None = Query(None, description="Search query"),
    query: str | None = Query(None, description="Alias for q"),
    entry_type: str | None = Query(None, alias="type", description="Entry kind filter"),
    tags: str | None = Query(None, description="Comma-separated tags (all required)"),
    letter: str | None = Query(None, description="First letter of the primary text"),
    limit: int | None = Query(None, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    explain: bool = Query(False, description="Include matched rule names"),
    service: SearchService = Depends(get_search_service),
    settings: Settings = Depends(get_settings),
):
    """
    Search entries, most relevant first.

    - **q** / **query**: Free text; empty lists entries alphabetically
    - **type**: word, phrase, quote or hypothetical
    - **tags**: Entry must carry every listed tag
    - **limit** / **offset**: Page bounds applied after ranking
    """
    request = SearchRequest(
        query=q or query or "",
        kind=_parse_kind(entry_type),
        tags=_parse_tags(tags),
        letter=letter or None,
        offset=offset,
        limit=page_size(limit, settings.search_default_limit, settings.search_max_limit),
        explain=explain,
    )

    response = await service.search(request)

    return SearchResultsResponse(
        results=[result.to_result() for result in response.results],
        total=response.total,
        limit=response.limit,
        offset=response.offset,
        query=response.query,
    )


@router.get("/explain/{entry_id}", response_model=ScoreExplanation)
async def explain(
    entry_id: int,
    q: str = Query("", description="Search query"),
    service: SearchService = Depends(get_search_service),
):
    """
    Break down one entry's score rule by rule.

    - **entry_id**: Stored entry ID
    - **q**: Query to score against
    """
    return await service.explain(entry_id, q)
