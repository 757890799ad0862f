"""
Answer Contracts - Interface to the upstream text generator.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Protocol, runtime_checkable


@runtime_checkable
class TextGenerator(Protocol):
    """Contract for streaming upstream generators."""

    def stream(self, prompt: str) -> AsyncGenerator[bytes, None]:
        """
        Stream raw response bytes for a prompt.

        Raises UpstreamError before yielding anything when the upstream
        answers with a non-success status.
        """
        ...
