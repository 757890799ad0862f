"""
Enrichment - Join a scored chunk with its source's display metadata.
"""

from __future__ import annotations

from msharag.domains.corpus import Chunk, CorpusReader

from .models import EnrichedResult

__all__ = ["enrich"]


def enrich(chunk: Chunk, score: float, corpus: CorpusReader) -> EnrichedResult:
    """Build the presentation record; source fields are None when unresolved."""
    source = corpus.get_source(chunk.source_id)
    return EnrichedResult(
        chunk_id=chunk.chunk_id,
        text=chunk.text,
        score=score,
        source_id=chunk.source_id,
        source_url=(source.uri or None) if source else None,
        source_name=(source.source_name or None) if source else None,
        source_type=(source.type or None) if source else None,
        metadata=chunk.metadata,
    )
