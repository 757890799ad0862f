"""
Configuration - Application settings and error taxonomy.
"""

from .errors import (
    CorpusLoadError,
    ErrorCode,
    LLMNotConfiguredError,
    MshaRagError,
    SearchError,
    UpstreamError,
)
from .settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Errors
    "ErrorCode",
    "MshaRagError",
    "SearchError",
    "CorpusLoadError",
    "LLMNotConfiguredError",
    "UpstreamError",
]
