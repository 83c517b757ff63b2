"""Middleware: request timing and body size limits."""

from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

_SCHEMA_PATHS = ("/ddl/schema",)
_MAX_BODY_SCHEMA = 2 * 1024 * 1024  # 2 MB for YAML schema documents
_MAX_BODY_DEFAULT = 256 * 1024  # 256 KB for everything else


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """Add X-Request-Duration-Ms header with processing time."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000
        response.headers["X-Request-Duration-Ms"] = f"{duration_ms:.1f}"
        return response


class RequestBodyLimitMiddleware(BaseHTTPMiddleware):
    """Reject request bodies that exceed size limits.

    Schema rendering accepts up to 2 MB; every other endpoint is capped at
    256 KB.  The Content-Length header is checked first, then the streamed
    byte count, so an oversized body is never fully buffered.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        limit = _MAX_BODY_SCHEMA if path.endswith(_SCHEMA_PATHS) else _MAX_BODY_DEFAULT
        too_large = JSONResponse(
            status_code=413,
            content={"detail": f"Request body too large (max {limit // 1024} KB)"},
        )

        content_length = request.headers.get("content-length")
        if content_length is not None and int(content_length) > limit:
            return too_large

        if request.method in ("POST", "PUT", "PATCH"):
            chunks: list[bytes] = []
            total = 0
            async for chunk in request.stream():
                total += len(chunk)
                if total > limit:
                    return too_large
                chunks.append(chunk)
            # Cache consumed body so downstream can call request.body()
            request._body = b"".join(chunks)  # noqa: SLF001

        return await call_next(request)
