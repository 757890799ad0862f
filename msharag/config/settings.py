"""
Settings - Application configuration using Pydantic Settings.

Loads from environment variables and .env files.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Corpus files (each one optional)
    chunks_file: Path = Path("data/chunks.jsonl")
    vectors_file: Path = Path("data/vectors.jsonl")
    sources_file: Path = Path("sources.jsonl")

    # Upstream generator (OpenAI Responses API)
    openai_api_key: str | None = None
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o-mini"
    # None disables the timeout entirely
    openai_timeout_seconds: float | None = None

    # Search
    search_default_top_k: int = 10
    chat_default_top_k: int = 5
    # 0 gives each ranking 1 / (position + 1)
    search_rrf_k: int = 0

    # API
    api_host: str = "0.0.0.0"
    api_port: int = Field(default=8090, validation_alias=AliasChoices("api_port", "port"))
    cors_origins: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
