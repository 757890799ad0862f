"""
API Interface - FastAPI REST API.

Search, chunk lookup, statistics and streaming chat over one corpus.
"""

from .main import app, create_app

__all__ = ["app", "create_app"]
