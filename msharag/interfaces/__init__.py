"""
Interfaces - User-facing applications.

- api: FastAPI REST API
- cli: Command-line interface
- mcp: MCP tools over stdio
"""

__all__ = ["api", "cli", "mcp"]
