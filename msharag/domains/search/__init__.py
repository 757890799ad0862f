"""
Search Domain - Keyword, vector and hybrid retrieval.

This domain handles:
- Keyword term-overlap scoring
- Vector cosine similarity scoring
- Reciprocal Rank Fusion
- Source enrichment of results
"""

from .contracts import SearchEngine
from .engine import RetrievalEngine
from .enrichment import enrich
from .fusion import fuse, reciprocal_rank_fusion
from .models import (
    EnrichedResult,
    ScoredChunk,
    SearchMode,
    SearchRequest,
    SearchResponse,
    SemanticHit,
)
from .scoring import cosine_similarity, score_keyword, score_semantic

__all__ = [
    "SearchEngine",
    "RetrievalEngine",
    "SearchMode",
    "SearchRequest",
    "SearchResponse",
    "EnrichedResult",
    "ScoredChunk",
    "SemanticHit",
    "score_keyword",
    "score_semantic",
    "cosine_similarity",
    "reciprocal_rank_fusion",
    "fuse",
    "enrich",
]
