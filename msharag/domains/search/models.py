"""
Search Models - Data types for search domain.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field, JsonValue, field_serializer

from msharag.domains.corpus import Chunk


class SearchMode(str, Enum):
    """Supported ranking modes."""

    KEYWORD = "keyword"
    SEMANTIC = "semantic"
    HYBRID = "hybrid"


@dataclass(frozen=True)
class ScoredChunk:
    """Chunk paired with a score; larger is better."""

    chunk: Chunk
    score: float


@dataclass(frozen=True)
class SemanticHit:
    """Vector similarity hit, resolved to a chunk later."""

    chunk_id: str
    score: float


class SearchRequest(BaseModel):
    """Search request."""

    query: str
    query_vector: list[float] | None = None
    # Free-form: unknown modes give an empty result, not a validation error
    mode: str = SearchMode.KEYWORD.value
    # None falls back to the configured search default
    top_k: int | None = None


class EnrichedResult(BaseModel):
    """Scored chunk joined with its source metadata."""

    chunk_id: str
    text: str
    score: float
    source_id: str
    source_url: str | None = None
    source_name: str | None = None
    source_type: str | None = None
    metadata: dict[str, JsonValue] = Field(default_factory=dict)

    @field_serializer("score")
    def _serialize_score(self, score: float) -> float | None:
        # Zero-norm embeddings give NaN, which JSON cannot carry
        return None if math.isnan(score) else score


class SearchResponse(BaseModel):
    """Ranked, enriched results."""

    results: list[EnrichedResult] = Field(default_factory=list)
    total: int = 0
    mode: str = SearchMode.KEYWORD.value
