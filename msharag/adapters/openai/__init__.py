"""
OpenAI Adapter - Upstream answer generator.

This is the ONLY place that calls the OpenAI API.
"""

from .client import OpenAIResponsesClient

__all__ = ["OpenAIResponsesClient"]
