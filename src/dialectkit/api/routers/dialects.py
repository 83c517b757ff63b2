"""Dialect endpoints: GET /dialects, GET /dialects/{name}, POST /dialects/resolve."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from dialectkit.api.schemas import DialectInfo, DialectListResponse, ResolveRequest
from dialectkit.dialect.base import Dialect
from dialectkit.dialect.registry import DialectRegistry, UnsupportedDialectError

router = APIRouter()


def _dialect_info(dialect: Dialect) -> DialectInfo:
    return DialectInfo(
        name=dialect.name,
        database_name=dialect.database_name,
        driver=dialect.driver_name,
        capabilities=asdict(dialect.capabilities),
    )


@router.get("", response_model=DialectListResponse)
async def list_dialects() -> DialectListResponse:
    """List all available SQL dialects and their capabilities."""
    registered = DialectRegistry.dialects()
    dialects = [_dialect_info(registered[name]) for name in sorted(registered)]
    return DialectListResponse(dialects=dialects)


@router.post("/resolve", response_model=DialectInfo)
async def resolve_dialect(body: ResolveRequest) -> DialectInfo:
    """Resolve the dialect for a connection URL."""
    try:
        dialect = DialectRegistry.for_url(body.url)
    except UnsupportedDialectError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from None
    return _dialect_info(dialect)


@router.get("/{name}", response_model=DialectInfo)
async def get_dialect(name: str) -> DialectInfo:
    """Describe one dialect."""
    try:
        dialect = DialectRegistry.get(name)
    except UnsupportedDialectError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from None
    return _dialect_info(dialect)
