"""
Answer Models - Chat request and streamed event types.

Each event serialises to a single SSE frame: ``data: {json}\\n\\n``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from pydantic import BaseModel, Field

from msharag.domains.search import EnrichedResult


class ChatRequest(BaseModel):
    """Streaming answer request."""

    # Optional here so a missing question gets a structured 400, not a 422
    question: str | None = None
    top_k: int | None = None


class StreamEvent(BaseModel):
    """Base for streamed answer events."""

    def to_sse(self) -> str:
        """Format as a Server-Sent Events frame."""
        return f"data: {self.model_dump_json()}\n\n"


class SourcesEvent(StreamEvent):
    """Retrieved context, always the first event."""

    type: Literal["sources"] = "sources"
    sources: list[EnrichedResult] = Field(default_factory=list)


class DeltaEvent(StreamEvent):
    """Incremental answer text."""

    type: Literal["delta"] = "delta"
    text: str


class DoneEvent(StreamEvent):
    """Upstream finished normally."""

    type: Literal["done"] = "done"


class ErrorEvent(StreamEvent):
    """Terminal failure."""

    type: Literal["error"] = "error"
    error: str


AnswerEvent = Union[SourcesEvent, DeltaEvent, DoneEvent, ErrorEvent]


@dataclass(frozen=True)
class PreparedAnswer:
    """Validated question with its retrieved context and composed prompt."""

    question: str
    prompt: str
    sources: list[EnrichedResult]
