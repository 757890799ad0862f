"""
Stream Relay - Rebuild upstream SSE lines from arbitrarily split fragments.

Transport fragments do not line up with event boundaries (or even UTF-8
character boundaries), so bytes are decoded incrementally and only complete
lines are handed on; the incomplete tail waits for the next fragment.
"""

from __future__ import annotations

import codecs
import json
import logging

logger = logging.getLogger(__name__)

__all__ = ["DELTA_EVENT_TYPES", "LineBuffer", "parse_delta_line"]

DATA_PREFIX = "data: "
DONE_MARKER = "data: [DONE]"

DELTA_EVENT_TYPES = frozenset(
    {
        "response.output_text.delta",
        "response.content_part.delta",
    }
)


class LineBuffer:
    """
    Forward-only line reassembly.

    Example:
        >>> buf = LineBuffer()
        >>> buf.feed(b"data: a\\nda")
        ['data: a']
        >>> buf.feed(b"ta: b\\n")
        ['data: b']
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._pending = ""

    def feed(self, fragment: bytes | str) -> list[str]:
        """Add a fragment and return the lines it completed."""
        if isinstance(fragment, bytes):
            fragment = self._decoder.decode(fragment)
        self._pending += fragment

        *lines, self._pending = self._pending.split("\n")
        return [line.rstrip("\r") for line in lines]

    @property
    def pending(self) -> str:
        """Incomplete trailing text not yet terminated by a newline."""
        return self._pending


def parse_delta_line(line: str) -> str | None:
    """
    Extract answer text from one upstream SSE line.

    Returns:
        The delta text, or None for non-data lines, the [DONE] marker,
        unparseable payloads, other event types and empty deltas
    """
    if not line.startswith(DATA_PREFIX) or line == DONE_MARKER:
        return None

    try:
        payload = json.loads(line[len(DATA_PREFIX):])
    except json.JSONDecodeError:
        logger.debug("Skipping unparseable upstream line: %s", line[:80])
        return None

    if not isinstance(payload, dict) or payload.get("type") not in DELTA_EVENT_TYPES:
        return None

    delta = payload.get("delta")
    text = delta.get("text") if isinstance(delta, dict) else delta
    if isinstance(text, str) and text:
        return text
    return None
