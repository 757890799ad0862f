"""
MCP Server - Expose corpus search to MCP clients over stdio.

Run with: msharag mcp
"""

from __future__ import annotations

import logging
from typing import Literal

from fastmcp import FastMCP

from msharag.domains.search import RetrievalEngine

from .tools import get_chunk_text, search_text, stats_text

logger = logging.getLogger(__name__)

__all__ = ["SERVER_NAME", "create_server"]

SERVER_NAME = "msha-rag-server"


def create_server(engine: RetrievalEngine, default_top_k: int = 10) -> FastMCP:
    """
    Build the MCP server with search, get_chunk and stats tools.

    Args:
        engine: Retrieval engine over a loaded corpus
        default_top_k: Result count when a search call gives none
    """
    mcp = FastMCP(
        name=SERVER_NAME,
        instructions="RAG search API for MSHA mine safety regulations and compliance guidance",
    )
    corpus = engine.corpus

    @mcp.tool(
        name="search",
        description="RAG search API for MSHA mine safety regulations and compliance guidance",
    )
    def search(
        query: str,
        query_vector: list[float] | None = None,
        mode: Literal["semantic", "keyword", "hybrid"] = "keyword",
        top_k: int | None = None,
    ) -> str:
        return search_text(
            engine,
            query,
            query_vector=query_vector,
            mode=mode,
            top_k=top_k,
            default_top_k=default_top_k,
        )

    @mcp.tool(name="get_chunk", description="Get a specific chunk by ID")
    def get_chunk(chunk_id: str) -> str:
        return get_chunk_text(corpus, chunk_id)

    @mcp.tool(name="stats", description="Get index statistics")
    def stats() -> str:
        return stats_text(corpus)

    logger.info("MCP server %s ready: %d chunks", SERVER_NAME, corpus.stats().chunks)
    return mcp
