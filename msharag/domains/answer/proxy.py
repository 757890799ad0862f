"""
Answer Proxy - Retrieval-grounded answer streaming.

Flow per request:
    validate -> retrieve (keyword) -> compose prompt -> sources event
    -> relay upstream deltas -> done | error

Validation and retrieval happen in ``prepare`` so that failures are raised
before any response stream is opened.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import aclosing

from msharag.config import LLMNotConfiguredError, SearchError, UpstreamError
from msharag.domains.search import SearchEngine, SearchMode

from .contracts import TextGenerator
from .models import (
    AnswerEvent,
    DeltaEvent,
    DoneEvent,
    ErrorEvent,
    PreparedAnswer,
    SourcesEvent,
)
from .prompt import build_prompt
from .relay import LineBuffer, parse_delta_line

logger = logging.getLogger(__name__)

__all__ = ["AnswerProxy", "GENERIC_STREAM_ERROR", "GENERIC_UPSTREAM_ERROR"]

GENERIC_UPSTREAM_ERROR = "API request failed"
GENERIC_STREAM_ERROR = "Failed to generate response"


class AnswerProxy:
    """
    Streams a generated answer grounded on retrieved chunks.

    Example:
        >>> proxy = AnswerProxy(engine, generator)
        >>> prepared = proxy.prepare("Do miners need hard hats?")
        >>> async for event in proxy.stream(prepared):
        ...     print(event.to_sse())
    """

    def __init__(
        self,
        engine: SearchEngine,
        generator: TextGenerator | None,
        default_top_k: int = 5,
    ) -> None:
        """
        Initialize answer proxy.

        Args:
            engine: Retrieval facade used for context
            generator: Upstream generator, None when no credential is configured
            default_top_k: Context size when the caller gives none
        """
        self._engine = engine
        self._generator = generator
        self._default_top_k = default_top_k

    def prepare(self, question: str | None, top_k: int | None = None) -> PreparedAnswer:
        """
        Validate the request, retrieve context and compose the prompt.

        Raises:
            SearchError: Question missing or blank
            LLMNotConfiguredError: No upstream generator configured
        """
        if not question or not question.strip():
            raise SearchError("question is required")
        if self._generator is None:
            raise LLMNotConfiguredError("OpenAI API key not configured")

        response = self._engine.search(
            question,
            mode=SearchMode.KEYWORD.value,
            top_k=top_k if top_k is not None else self._default_top_k,
        )

        logger.info(
            "Answer context: question='%s' -> %d sources",
            question[:50],
            response.total,
        )

        return PreparedAnswer(
            question=question,
            prompt=build_prompt(question, response.results),
            sources=response.results,
        )

    async def stream(self, prepared: PreparedAnswer) -> AsyncIterator[AnswerEvent]:
        """
        Relay the upstream answer as events.

        Yields:
            One SourcesEvent, zero or more DeltaEvents, then DoneEvent or ErrorEvent
        """
        if self._generator is None:
            raise LLMNotConfiguredError("OpenAI API key not configured")

        yield SourcesEvent(sources=prepared.sources)

        buffer = LineBuffer()
        deltas = 0
        try:
            # Closing this generator closes the upstream stream with it
            async with aclosing(self._generator.stream(prepared.prompt)) as fragments:
                async for fragment in fragments:
                    for line in buffer.feed(fragment):
                        text = parse_delta_line(line)
                        if text:
                            deltas += 1
                            yield DeltaEvent(text=text)
        except UpstreamError as e:
            logger.warning("Upstream rejected request: %s", e.message)
            yield ErrorEvent(error=e.message or GENERIC_UPSTREAM_ERROR)
            return
        except asyncio.CancelledError:
            logger.info("Client disconnected after %d deltas", deltas)
            raise
        except Exception:
            logger.exception("Answer stream failed after %d deltas", deltas)
            yield ErrorEvent(error=GENERIC_STREAM_ERROR)
            return

        if buffer.pending:
            logger.debug("Discarding unterminated upstream line: %s", buffer.pending[:80])

        logger.info("Answer stream complete: %d deltas", deltas)
        yield DoneEvent()

    async def answer(
        self,
        question: str | None,
        top_k: int | None = None,
    ) -> AsyncIterator[AnswerEvent]:
        """Prepare and stream in one call; validation errors raise on first iteration."""
        prepared = self.prepare(question, top_k)
        async for event in self.stream(prepared):
            yield event
