"""
OpenAI Client - Streaming access to the Responses API.

Features:
- Async HTTP client (httpx) with lazy creation
- Raw byte streaming; line reassembly happens in the answer domain
- Upstream error messages surfaced as UpstreamError

No retries: a failed upstream call ends the answer stream.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncGenerator
from typing import Any

import httpx

from msharag.config import UpstreamError

logger = logging.getLogger(__name__)

__all__ = ["OpenAIResponsesClient"]

DEFAULT_ERROR_MESSAGE = "API request failed"


class OpenAIResponsesClient:
    """
    OpenAI Responses API streaming client.

    Example:
        >>> client = OpenAIResponsesClient(api_key="sk-...")
        >>> async for fragment in client.stream("What is Part 56?"):
        ...     print(fragment)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-4o-mini",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize OpenAI client.

        Args:
            api_key: Bearer credential
            base_url: API root
            model: Model name
            timeout: Request timeout in seconds, None for no timeout
            transport: Custom httpx transport (tests)
        """
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._api_key = api_key
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
            )
        return self._client

    async def stream(self, prompt: str) -> AsyncGenerator[bytes, None]:
        """
        Stream raw SSE bytes for a prompt.

        Args:
            prompt: Full generator input

        Yields:
            Response body fragments as they arrive

        Raises:
            UpstreamError: Non-success status, before anything is yielded
            httpx.HTTPError: Transport failure
        """
        client = await self._get_client()

        payload: dict[str, Any] = {
            "model": self.model,
            "input": prompt,
            "stream": True,
        }

        async with client.stream("POST", "/responses", json=payload) as response:
            if response.is_error:
                body = await response.aread()
                message = _error_message(body)
                logger.error("OpenAI error: %s %s", response.status_code, message)
                raise UpstreamError(message, status_code=response.status_code)

            async for fragment in response.aiter_bytes():
                yield fragment

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None


def _error_message(body: bytes) -> str:
    """Pull error.message out of an error body, with a generic fallback."""
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return DEFAULT_ERROR_MESSAGE

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str) and error["message"]:
            return error["message"]
    return DEFAULT_ERROR_MESSAGE
