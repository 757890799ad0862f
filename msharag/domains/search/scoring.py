"""
Scoring - Keyword term overlap and cosine similarity rankers.

Both rankers sort descending and keep corpus order on ties.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Sequence

import numpy as np

from msharag.domains.corpus import Chunk, Vector

from .models import ScoredChunk, SemanticHit

logger = logging.getLogger(__name__)

__all__ = ["cosine_similarity", "score_keyword", "score_semantic", "split_terms"]

_WHITESPACE = re.compile(r"\s+")


def split_terms(query: str) -> list[str]:
    """
    Lower-case and split on whitespace runs.

    Empty terms from leading/trailing whitespace are kept and count toward
    the denominator, so an empty query is one empty term matching everything.
    """
    return _WHITESPACE.split(query.lower())


def score_keyword(
    query: str,
    chunks: Sequence[Chunk],
    top_k: int,
) -> list[ScoredChunk]:
    """
    Rank chunks by the fraction of query terms found in their text.

    Args:
        query: Raw query string
        chunks: Candidate chunks in corpus order
        top_k: Number of ranked entries kept before zero scores are dropped

    Returns:
        At most top_k results, all with score > 0
    """
    terms = split_terms(query)

    scored = []
    for chunk in chunks:
        text = chunk.text.lower()
        matches = sum(1 for term in terms if term in text)
        scored.append(ScoredChunk(chunk=chunk, score=matches / len(terms)))

    scored.sort(key=lambda r: r.score, reverse=True)

    # Truncate first, then filter: may return fewer than top_k
    return [r for r in scored[:top_k] if r.score > 0]


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity of two embeddings.

    Returns NaN when either vector has zero norm or the dimensions differ.
    """
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape:
        logger.debug("Embedding dimension mismatch: %s vs %s", va.shape, vb.shape)
        return math.nan

    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.dot(va, vb) / (np.linalg.norm(va) * np.linalg.norm(vb)))


def _rank_key(hit: SemanticHit) -> float:
    # NaN never compares, so park it below every real score
    return -math.inf if math.isnan(hit.score) else hit.score


def score_semantic(
    query_vector: Sequence[float],
    vectors: Sequence[Vector],
    top_k: int,
) -> list[SemanticHit]:
    """
    Rank vectors by cosine similarity to the query embedding.

    Args:
        query_vector: Query embedding
        vectors: Corpus vectors in load order
        top_k: Number of hits to keep

    Returns:
        min(top_k, len(vectors)) hits, no zero filtering
    """
    hits = [
        SemanticHit(chunk_id=v.chunk_id, score=cosine_similarity(query_vector, v.embedding))
        for v in vectors
    ]
    hits.sort(key=_rank_key, reverse=True)
    return hits[:top_k]
