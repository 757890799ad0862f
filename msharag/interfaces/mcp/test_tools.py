"""Tests for MCP tool handlers."""

from __future__ import annotations

import json

import pytest
from fastmcp import FastMCP

from msharag.domains.corpus import Chunk, CorpusStore, Source, Vector
from msharag.domains.search import RetrievalEngine

from .server import create_server
from .tools import CHUNK_NOT_FOUND, get_chunk_text, search_text, stats_text


@pytest.fixture
def engine() -> RetrievalEngine:
    """Create an engine over a one-chunk corpus."""
    store = CorpusStore(
        sources=[
            Source(source_id="s1", source_name="Part 56", uri="http://x", type="regulation")
        ],
        chunks=[Chunk(chunk_id="c1", source_id="s1", text="Miners must wear hard hats")],
        vectors=[Vector(chunk_id="c1", embedding=[1.0, 0.0])],
    )
    return RetrievalEngine(store)


def test_search_text_keyword(engine: RetrievalEngine) -> None:
    """Test search tool output is the JSON search response."""
    data = json.loads(search_text(engine, "hard hats"))

    assert data["mode"] == "keyword"
    assert data["total"] == 1
    assert data["results"][0]["source_name"] == "Part 56"


def test_search_text_semantic(engine: RetrievalEngine) -> None:
    """Test semantic mode through the tool handler."""
    data = json.loads(search_text(engine, "", query_vector=[1.0, 0.0], mode="semantic", top_k=1))
    assert data["results"][0]["chunk_id"] == "c1"


def test_search_text_is_indented(engine: RetrievalEngine) -> None:
    """Test output is pretty-printed."""
    assert "\n  " in search_text(engine, "hard hats")


def test_get_chunk_text(engine: RetrievalEngine) -> None:
    """Test chunk lookup tool."""
    data = json.loads(get_chunk_text(engine.corpus, "c1"))
    assert data["text"] == "Miners must wear hard hats"


def test_get_chunk_text_not_found(engine: RetrievalEngine) -> None:
    """Test missing chunks give a plain message."""
    assert get_chunk_text(engine.corpus, "nope") == CHUNK_NOT_FOUND


def test_stats_text(engine: RetrievalEngine) -> None:
    """Test stats tool."""
    assert json.loads(stats_text(engine.corpus)) == {"chunks": 1, "vectors": 1}


def test_create_server(engine: RetrievalEngine) -> None:
    """Test the MCP server builds."""
    assert isinstance(create_server(engine), FastMCP)


def test_search_text_uses_default_top_k() -> None:
    """Test a missing top_k falls back to the configured default."""
    engine = RetrievalEngine(
        CorpusStore(
            chunks=[
                Chunk(chunk_id="c1", text="hard hats"),
                Chunk(chunk_id="c2", text="hard hats and boots"),
            ]
        )
    )

    assert json.loads(search_text(engine, "hard hats", default_top_k=1))["total"] == 1
    assert json.loads(search_text(engine, "hard hats", top_k=5, default_top_k=1))["total"] == 2
