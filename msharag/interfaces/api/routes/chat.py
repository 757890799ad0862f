"""
Chat Routes - Streaming RAG answers over Server-Sent Events.

SSE Format (one frame per event):
    data: {"type": "sources", "sources": [...]}
    data: {"type": "delta", "text": "..."}
    data: {"type": "done"}
    data: {"type": "error", "error": "..."}
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from msharag.domains.answer import AnswerProxy, ChatRequest
from msharag.interfaces.api.deps import get_answer_proxy

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/chat")
async def chat(
    request: ChatRequest,
    proxy: AnswerProxy = Depends(get_answer_proxy),
) -> StreamingResponse:
    """
    Answer a question with retrieved MSHA context, streamed as SSE.

    - **question**: Question text (required)
    - **top_k**: Number of context chunks (default 5)

    A missing question (400) or missing API key (500) is reported as a
    plain JSON error before any stream is opened.
    """
    prepared = proxy.prepare(request.question, request.top_k)

    async def event_generator() -> AsyncGenerator[str, None]:
        async for event in proxy.stream(prepared):
            yield event.to_sse()

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable nginx buffering
        },
    )
