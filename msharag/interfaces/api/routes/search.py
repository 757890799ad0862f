"""
Search Routes - Ranked search, chunk lookup and corpus statistics.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from msharag.config import ErrorCode, MshaRagError, Settings, get_settings
from msharag.domains.corpus import Chunk, CorpusStats, CorpusStore
from msharag.domains.search import RetrievalEngine, SearchRequest, SearchResponse
from msharag.interfaces.api.deps import get_corpus_store, get_retrieval_engine

router = APIRouter()


@router.post("/search", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    engine: RetrievalEngine = Depends(get_retrieval_engine),
    settings: Settings = Depends(get_settings),
) -> SearchResponse:
    """
    Search the corpus.

    - **query**: Search query text
    - **query_vector**: Precomputed embedding (semantic and hybrid modes)
    - **mode**: "keyword" (default), "semantic" or "hybrid"
    - **top_k**: Maximum results (default SEARCH_DEFAULT_TOP_K, 10)

    Semantic and hybrid modes without a query_vector return no results.
    """
    return engine.search(
        request.query,
        mode=request.mode,
        top_k=request.top_k if request.top_k is not None else settings.search_default_top_k,
        query_vector=request.query_vector,
    )


@router.get("/chunks/{chunk_id}", response_model=Chunk)
async def get_chunk(
    chunk_id: str,
    store: CorpusStore = Depends(get_corpus_store),
) -> Chunk:
    """Get a specific chunk by ID."""
    chunk = store.get_chunk(chunk_id)
    if chunk is None:
        raise MshaRagError(ErrorCode.NOT_FOUND, "Chunk not found", {"chunk_id": chunk_id})
    return chunk


@router.get("/stats", response_model=CorpusStats)
async def stats(store: CorpusStore = Depends(get_corpus_store)) -> CorpusStats:
    """Get index statistics."""
    return store.stats()
