"""
API Middleware - Request tracing, timing and error envelopes.

Provides:
- X-Request-ID propagation
- X-Response-Time-Ms (headers-sent time for SSE responses)
- MshaRagError -> {"error": {...}, "request_id": ...} JSON
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from msharag.config.errors import ErrorCode, MshaRagError, UpstreamError

logger = logging.getLogger(__name__)

RequestHandler = Callable[[Request], Awaitable[Response]]

REQUEST_ID_HEADER = "X-Request-ID"

# Probes hit these constantly; log them at debug only
_QUIET_PATHS = frozenset({"/health"})

_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.SEARCH_INVALID_QUERY: 400,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.LLM_UPSTREAM_FAILED: 502,
    ErrorCode.CORPUS_LOAD_FAILED: 503,
    # Missing credential is a server-side misconfiguration
    ErrorCode.LLM_NOT_CONFIGURED: 500,
}


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def _error_response(status_code: int, error: dict[str, Any], request_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "request_id": request_id},
        headers={REQUEST_ID_HEADER: request_id},
    )


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Reuse the caller's X-Request-ID or mint one, and echo it back."""

    async def dispatch(self, request: Request, call_next: RequestHandler) -> Response:
        request.state.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

        response = await call_next(request)
        response.headers.setdefault(REQUEST_ID_HEADER, request.state.request_id)
        return response


class LatencyMiddleware(BaseHTTPMiddleware):
    """Time each request up to the response headers."""

    async def dispatch(self, request: Request, call_next: RequestHandler) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers["X-Response-Time-Ms"] = f"{elapsed_ms:.2f}"

        level = logging.DEBUG if request.url.path in _QUIET_PATHS else logging.INFO
        logger.log(
            level,
            "%s %s -> %d in %.1fms request_id=%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            _request_id(request),
        )
        return response


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turn errors raised before a response starts into JSON envelopes."""

    async def dispatch(self, request: Request, call_next: RequestHandler) -> Response:
        try:
            return await call_next(request)
        except MshaRagError as e:
            request_id = _request_id(request)
            logger.warning(
                "%s on %s: %s request_id=%s",
                e.code.value,
                request.url.path,
                e.message,
                request_id,
            )
            error = e.to_dict()
            if isinstance(e, UpstreamError) and e.status_code is not None:
                error["details"] = {**error["details"], "upstream_status": e.status_code}
            return _error_response(_error_code_to_status(e.code), error, request_id)
        except Exception:
            request_id = _request_id(request)
            logger.exception("Unhandled error on %s request_id=%s", request.url.path, request_id)
            return _error_response(
                500,
                {
                    "code": ErrorCode.INTERNAL_ERROR.value,
                    "message": "Internal server error",
                    "details": {},
                },
                request_id,
            )


def _error_code_to_status(code: ErrorCode) -> int:
    """HTTP status for an error code, 500 when unmapped."""
    return _STATUS_BY_CODE.get(code, 500)
