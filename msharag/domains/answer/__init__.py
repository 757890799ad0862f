"""
Answer Domain - Retrieval-grounded streaming answers.

This domain handles:
- Grounding prompt composition
- Upstream SSE line reassembly
- sources / delta / done / error event relay
"""

from .contracts import TextGenerator
from .models import (
    AnswerEvent,
    ChatRequest,
    DeltaEvent,
    DoneEvent,
    ErrorEvent,
    PreparedAnswer,
    SourcesEvent,
    StreamEvent,
)
from .prompt import build_context, build_prompt
from .proxy import AnswerProxy
from .relay import LineBuffer, parse_delta_line

__all__ = [
    "TextGenerator",
    "AnswerProxy",
    "ChatRequest",
    "AnswerEvent",
    "StreamEvent",
    "SourcesEvent",
    "DeltaEvent",
    "DoneEvent",
    "ErrorEvent",
    "PreparedAnswer",
    "LineBuffer",
    "parse_delta_line",
    "build_context",
    "build_prompt",
]
