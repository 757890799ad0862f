"""
Health Routes - System health and status endpoints.
"""

from typing import Any

from fastapi import APIRouter, Depends

from msharag import __version__
from msharag.domains.corpus import CorpusStore
from msharag.interfaces.api.deps import get_corpus_store

router = APIRouter()


@router.get("/health")
async def health_check(
    store: CorpusStore = Depends(get_corpus_store),
) -> dict[str, Any]:
    """Health check endpoint with loaded chunk count."""
    return {"status": "ok", "chunks": store.stats().chunks}


@router.get("/api")
async def api_info() -> dict[str, Any]:
    """API info endpoint."""
    return {
        "name": "MSHA RAG API",
        "version": __version__,
        "description": "RAG search for MSHA mine safety regulations and compliance guidance",
        "docs": "/docs",
    }
