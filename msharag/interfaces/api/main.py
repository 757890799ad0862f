"""
FastAPI Main Application - Unified API entry point.

Run with: uvicorn msharag.interfaces.api.main:app --port 8090
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from msharag import __version__
from msharag.config import get_settings

from .deps import cleanup_services, init_services
from .middleware import (
    ErrorHandlerMiddleware,
    LatencyMiddleware,
    RequestIDMiddleware,
)
from .routes import chat, health, search

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    logger.info("Starting MSHA RAG API...")
    logger.info("  Chunks file: %s", settings.chunks_file)
    logger.info("  Upstream model: %s", settings.openai_model)
    if not settings.openai_api_key:
        logger.warning("  OPENAI_API_KEY not set: /chat will be unavailable")

    # Corpus must be loaded before serving
    await init_services()
    logger.info("  Corpus loaded")

    yield

    logger.info("Shutting down MSHA RAG API...")
    await cleanup_services()


def create_app() -> FastAPI:
    """Create FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="MSHA RAG API",
        description="RAG search API for MSHA mine safety regulations and compliance guidance",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Starlette wraps in reverse: the last added runs first.
    # CORS -> request id -> latency -> error envelope -> routes
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(LatencyMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID", "X-Response-Time-Ms"],
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(search.router, tags=["Search"])
    app.include_router(chat.router, tags=["Chat"])

    return app


# Create app instance
app = create_app()
