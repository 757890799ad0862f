"""
MCP Interface - Tool access for MCP clients (stdio transport).
"""

from .server import SERVER_NAME, create_server
from .tools import get_chunk_text, search_text, stats_text

__all__ = ["SERVER_NAME", "create_server", "search_text", "get_chunk_text", "stats_text"]
