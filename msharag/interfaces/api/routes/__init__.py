"""
API Routes.
"""

from . import chat, health, search

__all__ = ["health", "search", "chat"]
