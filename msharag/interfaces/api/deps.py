"""
API Dependencies - Dependency injection for FastAPI routes.

Provides singleton instances of the corpus, engine and upstream client.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from msharag.adapters.openai import OpenAIResponsesClient
from msharag.config import get_settings
from msharag.domains.answer import AnswerProxy, TextGenerator
from msharag.domains.corpus import CorpusStore, load_corpus
from msharag.domains.search import RetrievalEngine


@lru_cache
def get_corpus_store() -> CorpusStore:
    """Get corpus store singleton (loaded on first use)."""
    settings = get_settings()
    return load_corpus(
        settings.chunks_file,
        settings.vectors_file,
        settings.sources_file,
    )


@lru_cache
def get_retrieval_engine() -> RetrievalEngine:
    """Get retrieval engine singleton."""
    settings = get_settings()
    return RetrievalEngine(get_corpus_store(), rrf_k=settings.search_rrf_k)


@lru_cache
def get_text_generator() -> OpenAIResponsesClient | None:
    """Get upstream client singleton, None when no API key is configured."""
    settings = get_settings()
    if not settings.openai_api_key:
        return None
    return OpenAIResponsesClient(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        model=settings.openai_model,
        timeout=settings.openai_timeout_seconds,
    )


def get_answer_proxy(
    engine: RetrievalEngine = Depends(get_retrieval_engine),
    generator: TextGenerator | None = Depends(get_text_generator),
) -> AnswerProxy:
    """Build the answer proxy for a request."""
    return AnswerProxy(
        engine,
        generator,
        default_top_k=get_settings().chat_default_top_k,
    )


async def init_services() -> None:
    """
    Initialize services on startup.

    The corpus must be loaded before the first request is served.
    """
    get_corpus_store()
    get_retrieval_engine()


async def cleanup_services() -> None:
    """Cleanup services on shutdown."""
    generator = get_text_generator()
    if generator is not None:
        await generator.close()
