"""
Reciprocal Rank Fusion - Merge keyword and semantic rankings.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from msharag.domains.corpus import Chunk

from .models import ScoredChunk

logger = logging.getLogger(__name__)

__all__ = ["reciprocal_rank_fusion", "fuse"]


def reciprocal_rank_fusion(
    *rankings: Sequence[str],
    rrf_k: int = 0,
) -> dict[str, float]:
    """
    Sum 1 / (rrf_k + rank) per ID across rankings (rank is 1-based).

    With rrf_k=0 each list contributes 1 / (position + 1).

    Returns:
        Accumulated scores, keyed in first-seen order
    """
    scores: dict[str, float] = {}
    for ranking in rankings:
        for rank, item_id in enumerate(ranking, 1):
            scores[item_id] = scores.get(item_id, 0.0) + 1.0 / (rrf_k + rank)
    return scores


def fuse(
    keyword_ids: Sequence[str],
    semantic_ids: Sequence[str],
    resolve: Callable[[str], Chunk | None],
    top_k: int,
    rrf_k: int = 0,
) -> list[ScoredChunk]:
    """
    Fuse two ranked ID lists into one ranking of chunks.

    Args:
        keyword_ids: Keyword ranking, best first
        semantic_ids: Semantic ranking, best first
        resolve: Chunk lookup; IDs it cannot resolve are dropped
        top_k: Number of fused results
        rrf_k: RRF constant

    Returns:
        Fused results sorted by score, ties in first-seen order
    """
    scores = reciprocal_rank_fusion(keyword_ids, semantic_ids, rrf_k=rrf_k)

    fused = []
    for chunk_id, score in scores.items():
        chunk = resolve(chunk_id)
        if chunk is None:
            logger.debug("Dropping unresolved chunk from fusion: %s", chunk_id)
            continue
        fused.append(ScoredChunk(chunk=chunk, score=score))

    fused.sort(key=lambda r: r.score, reverse=True)
    return fused[:top_k]
