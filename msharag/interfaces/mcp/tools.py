"""
MCP Tool Handlers - Text payloads for the search, get_chunk and stats tools.

Kept free of the MCP framework so they can be called and tested directly.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from msharag.domains.corpus import CorpusReader
from msharag.domains.search import SearchEngine

__all__ = ["CHUNK_NOT_FOUND", "get_chunk_text", "search_text", "stats_text"]

CHUNK_NOT_FOUND = "Chunk not found"


def search_text(
    engine: SearchEngine,
    query: str,
    query_vector: Sequence[float] | None = None,
    mode: str = "keyword",
    top_k: int | None = None,
    default_top_k: int = 10,
) -> str:
    """
    Run a search and return the response as indented JSON.

    A missing top_k falls back to default_top_k.
    """
    if top_k is None:
        top_k = default_top_k
    response = engine.search(query, mode=mode, top_k=top_k, query_vector=query_vector)
    return response.model_dump_json(indent=2)


def get_chunk_text(corpus: CorpusReader, chunk_id: str) -> str:
    """Return the chunk as indented JSON, or a not-found message."""
    chunk = corpus.get_chunk(chunk_id)
    if chunk is None:
        return CHUNK_NOT_FOUND
    return chunk.model_dump_json(indent=2)


def stats_text(corpus: CorpusReader) -> str:
    return json.dumps(corpus.stats().model_dump(), indent=2)
