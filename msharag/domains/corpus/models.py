"""
Corpus Models - Records loaded once at start-up and never mutated.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, JsonValue


class Source(BaseModel):
    """Provenance record for a regulation, guidance document, etc."""

    source_id: str
    type: str = ""  # "regulation", "guidance", ...
    uri: str = ""
    source_name: str = ""
    tags: list[str] | None = None

    model_config = {"frozen": True}


class Chunk(BaseModel):
    """Retrievable unit of corpus text."""

    chunk_id: str
    source_id: str = ""
    text: str = ""
    # Opaque to ranking; values restricted to JSON variants
    metadata: dict[str, JsonValue] = Field(default_factory=dict)

    model_config = {"frozen": True}


class Vector(BaseModel):
    """Precomputed embedding for one chunk."""

    chunk_id: str
    embedding: list[float]

    model_config = {"frozen": True}


class CorpusStats(BaseModel):
    """Corpus size counters."""

    chunks: int
    vectors: int
