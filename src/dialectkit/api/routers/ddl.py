"""DDL endpoints: render CREATE TABLE statements for a dialect."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from dialectkit.api.deps import get_settings, resolve_dialect
from dialectkit.api.schemas import (
    CreateTableRequest,
    CreateTableResponse,
    ErrorDetail,
    SchemaDdlRequest,
    SchemaDdlResponse,
)
from dialectkit.converters.base import DefaultValueParseError
from dialectkit.ddl.builder import build_create_table
from dialectkit.dialect.base import UnsupportedCapabilityError
from dialectkit.parser.loader import SchemaLoader, SchemaLoadError, YAMLSafetyError
from dialectkit.settings import Settings

router = APIRouter()


@router.post("/create-table", response_model=CreateTableResponse)
async def create_table(
    body: CreateTableRequest,
    settings: Settings = Depends(get_settings),  # noqa: B008
) -> CreateTableResponse:
    """Render the statements that create one table."""
    dialect = resolve_dialect(body.dialect, settings)
    try:
        plan = build_create_table(dialect, body.table, if_not_exists=body.if_not_exists)
    except (UnsupportedCapabilityError, DefaultValueParseError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None
    return CreateTableResponse.from_plan(plan)


@router.post("/schema", response_model=SchemaDdlResponse)
async def schema_ddl(
    body: SchemaDdlRequest,
    settings: Settings = Depends(get_settings),  # noqa: B008
) -> SchemaDdlResponse:
    """Render the statements for every table in a YAML schema document."""
    dialect = resolve_dialect(body.dialect, settings)
    try:
        tables = SchemaLoader().load_string(body.schema_yaml, filename="<request>")
    except YAMLSafetyError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None
    except SchemaLoadError as exc:
        errors = [
            ErrorDetail(
                code=e.code,
                message=e.message,
                path=e.path,
                line=e.span.line if e.span else None,
                column=e.span.column if e.span else None,
            ).model_dump()
            for e in exc.errors
        ]
        raise HTTPException(status_code=422, detail={"errors": errors}) from None

    try:
        plans = [
            build_create_table(dialect, t, if_not_exists=body.if_not_exists) for t in tables
        ]
    except (UnsupportedCapabilityError, DefaultValueParseError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None
    return SchemaDdlResponse(
        dialect=dialect.name,
        tables=[CreateTableResponse.from_plan(p) for p in plans],
    )
