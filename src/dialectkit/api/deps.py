"""Dependency helpers shared by the routers."""

from __future__ import annotations

from fastapi import HTTPException, Request

from dialectkit.dialect import Dialect, DialectRegistry, UnsupportedDialectError
from dialectkit.settings import Settings


def get_settings(request: Request) -> Settings:
    """FastAPI ``Depends`` provider for the app's Settings."""
    settings: Settings = request.app.state.settings
    return settings


def resolve_dialect(name: str | None, settings: Settings) -> Dialect:
    """Look up the named dialect, falling back to the configured default.

    There is no built-in default: a request that names no dialect on a server
    without ``DEFAULT_DIALECT`` is rejected.
    """
    name = name or settings.default_dialect
    if name is None:
        raise HTTPException(status_code=422, detail="No dialect given and no default configured")
    try:
        return DialectRegistry.get(name)
    except UnsupportedDialectError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from None
