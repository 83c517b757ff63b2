"""Query endpoint: POST /query/select."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from dialectkit.api.deps import get_settings, resolve_dialect
from dialectkit.api.schemas import SelectRequest, SelectResponse
from dialectkit.dialect.base import UnsupportedCapabilityError
from dialectkit.query.select import render_select
from dialectkit.settings import Settings

router = APIRouter()


@router.post("/select", response_model=SelectResponse)
async def select(
    body: SelectRequest,
    settings: Settings = Depends(get_settings),  # noqa: B008
) -> SelectResponse:
    """Render a paginated single-table SELECT."""
    dialect = resolve_dialect(body.dialect, settings)
    try:
        sql = render_select(
            dialect,
            body.table,
            body.columns,
            where=body.where,
            order_by=[(o.column, o.desc) for o in body.order_by],
            limit=body.limit,
            offset=body.offset,
        )
    except UnsupportedCapabilityError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None
    return SelectResponse(sql=sql, dialect=dialect.name)
