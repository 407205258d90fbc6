"""
Health Routes - System health and status endpoints.
"""

from typing import Any

from fastapi import APIRouter

from lexicon import __version__

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": "lexicon"}


@router.get("/api")
async def api_info() -> dict[str, Any]:
    """API info endpoint."""
    return {
        "name": "Lexicon Search API",
        "version": __version__,
        "description": "Relevance-ranked search over a personal lexicon",
        "docs": "/docs",
    }
