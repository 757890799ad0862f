"""
Error Taxonomy - Consistent error codes across the application.

Usage:
    from msharag.config.errors import ErrorCode, MshaRagError

    raise MshaRagError(ErrorCode.NOT_FOUND, "Chunk not found")
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes for machine-readable error responses."""

    # Search errors
    SEARCH_INVALID_QUERY = "SEARCH_INVALID_QUERY"

    # Corpus errors
    CORPUS_LOAD_FAILED = "CORPUS_LOAD_FAILED"

    # LLM/upstream errors
    LLM_NOT_CONFIGURED = "LLM_NOT_CONFIGURED"
    LLM_UPSTREAM_FAILED = "LLM_UPSTREAM_FAILED"

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"


class MshaRagError(Exception):
    """Base exception with error code support."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to API-friendly dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


# Domain-specific exceptions for cleaner imports
class SearchError(MshaRagError):
    """Invalid search or answer request."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.SEARCH_INVALID_QUERY, message, details)


class CorpusLoadError(MshaRagError):
    """Corpus files exist but cannot be read."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.CORPUS_LOAD_FAILED, message, details)


class LLMNotConfiguredError(MshaRagError):
    """No upstream credential configured."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.LLM_NOT_CONFIGURED, message, details)


class UpstreamError(MshaRagError):
    """Upstream generator answered with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(ErrorCode.LLM_UPSTREAM_FAILED, message, details)
