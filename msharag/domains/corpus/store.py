"""
Corpus Store - Immutable in-memory snapshot of sources, chunks and vectors.

Built once at start-up and shared by reference between request handlers.
Nothing mutates it afterwards, so no locking is needed. Reloading means
building a new store and swapping the reference.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .models import Chunk, CorpusStats, Source, Vector

logger = logging.getLogger(__name__)

__all__ = ["CorpusStore"]


class CorpusStore:
    """
    Read-only corpus with O(1) lookup by identifier.

    Example:
        >>> store = CorpusStore(sources=[...], chunks=[...], vectors=[...])
        >>> store.get_chunk("c1")
        Chunk(chunk_id='c1', ...)
    """

    def __init__(
        self,
        sources: Iterable[Source] = (),
        chunks: Iterable[Chunk] = (),
        vectors: Iterable[Vector] = (),
    ) -> None:
        """
        Build the snapshot.

        Args:
            sources: Source records
            chunks: Chunk records, kept in the given order
            vectors: Vector records, kept in the given order
        """
        self._sources: dict[str, Source] = {}
        for source in sources:
            self._sources[source.source_id] = source

        self._chunks: tuple[Chunk, ...] = tuple(chunks)
        self._chunk_map: dict[str, Chunk] = {}
        for chunk in self._chunks:
            if chunk.chunk_id in self._chunk_map:
                # Last record wins for lookup
                logger.warning("Duplicate chunk_id in corpus: %s", chunk.chunk_id)
            self._chunk_map[chunk.chunk_id] = chunk

        self._vectors: tuple[Vector, ...] = tuple(vectors)

        logger.info(
            "Corpus store ready: %d sources, %d chunks, %d vectors",
            len(self._sources),
            len(self._chunks),
            len(self._vectors),
        )

    def get_chunk(self, chunk_id: str) -> Chunk | None:
        """Get a chunk by ID."""
        return self._chunk_map.get(chunk_id)

    def get_source(self, source_id: str) -> Source | None:
        """Get a source by ID."""
        return self._sources.get(source_id)

    def all_chunks(self) -> Sequence[Chunk]:
        return self._chunks

    def all_vectors(self) -> Sequence[Vector]:
        return self._vectors

    def stats(self) -> CorpusStats:
        return CorpusStats(chunks=len(self._chunks), vectors=len(self._vectors))
