"""FastAPI application factory for dialectkit."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI

from dialectkit import __version__
from dialectkit.api.middleware import RequestBodyLimitMiddleware, RequestTimingMiddleware
from dialectkit.api.routers import ddl, dialects, query
from dialectkit.api.schemas import HealthResponse
from dialectkit.settings import Settings


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="dialectkit",
        description="Renders vendor-specific DDL and pagination SQL from table schemas.",
        version=__version__,
    )
    app.state.settings = settings

    # Middleware
    app.add_middleware(RequestBodyLimitMiddleware)
    app.add_middleware(RequestTimingMiddleware)

    app.include_router(dialects.router, prefix="/dialects", tags=["dialects"])
    app.include_router(ddl.router, prefix="/ddl", tags=["ddl"])
    app.include_router(query.router, prefix="/query", tags=["query"])

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    return app


def main() -> None:
    """Run the REST API server using settings from environment / .env file."""
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger = logging.getLogger("dialectkit.api")
    logger.info(
        "dialectkit API Server v%s starting (host=%s, port=%d, default dialect=%s)",
        __version__,
        settings.api_server_host,
        settings.effective_port,
        settings.default_dialect,
    )

    uvicorn.run(
        "dialectkit.api.app:create_app",
        factory=True,
        host=settings.api_server_host,
        port=settings.effective_port,
        log_level=settings.log_level.lower(),
    )
