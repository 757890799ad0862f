"""
Corpus Contracts - Read-only access used by the search domain.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .models import Chunk, CorpusStats, Source, Vector


@runtime_checkable
class CorpusReader(Protocol):
    """Contract for read-only corpus access."""

    def get_chunk(self, chunk_id: str) -> Chunk | None:
        """Look up a chunk, None when absent."""
        ...

    def get_source(self, source_id: str) -> Source | None:
        """Look up a source, None when absent."""
        ...

    def all_chunks(self) -> Sequence[Chunk]:
        """All chunks in load order."""
        ...

    def all_vectors(self) -> Sequence[Vector]:
        """All vectors in load order."""
        ...

    def stats(self) -> CorpusStats:
        """Chunk and vector counts."""
        ...
