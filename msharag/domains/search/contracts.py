"""
Search Contracts - Interfaces for search domain.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .models import SearchResponse


@runtime_checkable
class SearchEngine(Protocol):
    """Contract for search implementations."""

    def search(
        self,
        query: str,
        mode: str = "keyword",
        top_k: int = 10,
        query_vector: Sequence[float] | None = None,
    ) -> SearchResponse:
        """Execute search and return enriched, ranked results."""
        ...
