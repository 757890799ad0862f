"""
CLI Interface - Command-line tools for MSHA RAG.

Provides commands for:
- Corpus search and chunk lookup
- HTTP and MCP servers
"""

from .main import app, main

__all__ = ["app", "main"]
