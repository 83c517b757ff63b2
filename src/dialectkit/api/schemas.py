"""API request/response Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from dialectkit.ddl.builder import CreateTablePlan
from dialectkit.models.field import TableSchema


class ErrorDetail(BaseModel):
    """A single schema error detail."""

    code: str
    message: str
    path: str | None = None
    line: int | None = None
    column: int | None = None


class DialectInfo(BaseModel):
    """Information about a supported dialect."""

    name: str
    database_name: str
    driver: str
    capabilities: dict[str, bool] = {}


class DialectListResponse(BaseModel):
    """Response for GET /dialects."""

    dialects: list[DialectInfo] = []


class ResolveRequest(BaseModel):
    """Request body for POST /dialects/resolve."""

    url: str = Field(description="Connection URL, e.g. sqlserver://host/db")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = ""


# ---------------------------------------------------------------------------
# DDL schemas
# ---------------------------------------------------------------------------


class CreateTableRequest(BaseModel):
    """Request body for POST /ddl/create-table."""

    dialect: str | None = None
    table: TableSchema
    if_not_exists: bool = False


class CreateTableResponse(BaseModel):
    """Rendered statements for one table, plus the combined execution order."""

    table_name: str
    statements_before: list[str] = []
    create_table: str
    statements_after: list[str] = []
    queries_after: list[str] = []
    statements: list[str] = []

    @classmethod
    def from_plan(cls, plan: CreateTablePlan) -> CreateTableResponse:
        return cls(
            table_name=plan.table_name,
            statements_before=plan.statements_before,
            create_table=plan.create_table,
            statements_after=plan.statements_after,
            queries_after=plan.queries_after,
            statements=plan.statements(),
        )


class SchemaDdlRequest(BaseModel):
    """Request body for POST /ddl/schema."""

    dialect: str | None = None
    schema_yaml: str = Field(description="YAML document with a 'tables' list")
    if_not_exists: bool = False


class SchemaDdlResponse(BaseModel):
    """Response body for POST /ddl/schema."""

    dialect: str
    tables: list[CreateTableResponse] = []


# ---------------------------------------------------------------------------
# Query schemas
# ---------------------------------------------------------------------------


class OrderByItem(BaseModel):
    column: str
    desc: bool = False


class SelectRequest(BaseModel):
    """Request body for POST /query/select."""

    dialect: str | None = None
    table: str
    columns: list[str] = []
    where: str | None = None
    order_by: list[OrderByItem] = []
    limit: int | None = Field(None, ge=0)
    offset: int | None = Field(None, ge=0)


class SelectResponse(BaseModel):
    """Response body for POST /query/select."""

    sql: str
    dialect: str
