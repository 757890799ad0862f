"""
Retrieval Engine - Keyword, semantic and hybrid search over the corpus.

Features:
- Term-overlap keyword ranking
- Cosine similarity over precomputed embeddings
- Reciprocal Rank Fusion (RRF) for hybrid mode
- Source enrichment of every result
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from msharag.domains.corpus import CorpusReader

from .enrichment import enrich
from .fusion import fuse
from .models import ScoredChunk, SearchMode, SearchResponse
from .scoring import score_keyword, score_semantic

logger = logging.getLogger(__name__)

__all__ = ["RetrievalEngine"]


class RetrievalEngine:
    """
    Single entry point for ranked, enriched retrieval.

    Missing preconditions (no query vector, unknown mode) give an empty
    response rather than an error.

    Example:
        >>> engine = RetrievalEngine(store)
        >>> response = engine.search("hard hats", mode="keyword", top_k=5)
    """

    def __init__(self, corpus: CorpusReader, rrf_k: int = 0) -> None:
        """
        Initialize retrieval engine.

        Args:
            corpus: Read-only corpus
            rrf_k: RRF constant (0 gives 1 / (position + 1))
        """
        self._corpus = corpus
        self._rrf_k = rrf_k

    @property
    def corpus(self) -> CorpusReader:
        return self._corpus

    def search(
        self,
        query: str,
        mode: str = SearchMode.KEYWORD.value,
        top_k: int = 10,
        query_vector: Sequence[float] | None = None,
    ) -> SearchResponse:
        """
        Execute search.

        Args:
            query: Query text (used by keyword and hybrid modes)
            mode: "keyword", "semantic" or "hybrid"; echoed back
            top_k: Result count, clamped to at least 1
            query_vector: Query embedding (semantic and hybrid modes)

        Returns:
            Enriched results sorted by relevance
        """
        top_k = max(1, int(top_k))

        ranked: list[ScoredChunk] = []
        if mode == SearchMode.KEYWORD:
            ranked = self.keyword_search(query, top_k)
        elif mode == SearchMode.SEMANTIC and query_vector is not None:
            ranked = self.semantic_search(query_vector, top_k)
        elif mode == SearchMode.HYBRID and query_vector is not None:
            ranked = self.hybrid_search(query, query_vector, top_k)
        else:
            logger.debug("No search performed: mode=%s has_vector=%s", mode, query_vector is not None)

        results = [enrich(r.chunk, r.score, self._corpus) for r in ranked]

        logger.info(
            "Search: mode=%s query='%s' -> %d results",
            mode,
            (query or "")[:50],
            len(results),
        )

        return SearchResponse(results=results, total=len(results), mode=mode)

    def keyword_search(self, query: str, top_k: int) -> list[ScoredChunk]:
        """Term-overlap ranking, zero scores dropped after truncation."""
        return score_keyword(query, self._corpus.all_chunks(), top_k)

    def semantic_search(
        self,
        query_vector: Sequence[float],
        top_k: int,
    ) -> list[ScoredChunk]:
        """Cosine ranking; hits whose chunk no longer exists are dropped."""
        results = []
        for hit in score_semantic(query_vector, self._corpus.all_vectors(), top_k):
            chunk = self._corpus.get_chunk(hit.chunk_id)
            if chunk is not None:
                results.append(ScoredChunk(chunk=chunk, score=hit.score))
        return results

    def hybrid_search(
        self,
        query: str,
        query_vector: Sequence[float],
        top_k: int,
    ) -> list[ScoredChunk]:
        """RRF over keyword and semantic candidate pools of 2 * top_k each."""
        pool = top_k * 2
        keyword = self.keyword_search(query, pool)
        semantic = score_semantic(query_vector, self._corpus.all_vectors(), pool)

        return fuse(
            [r.chunk.chunk_id for r in keyword],
            [h.chunk_id for h in semantic],
            resolve=self._corpus.get_chunk,
            top_k=top_k,
            rrf_k=self._rrf_k,
        )
