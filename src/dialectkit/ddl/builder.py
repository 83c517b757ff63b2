"""Build the ordered statements that create or drop a table for a dialect."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from dialectkit.dialect.base import DdlContext, Dialect, UnsupportedCapabilityError
from dialectkit.models.field import TableSchema

logger = logging.getLogger("dialectkit.ddl")


@dataclass
class CreateTablePlan:
    """Everything needed to create one table, in execution order."""

    table_name: str
    create_table: str
    statements_before: list[str] = field(default_factory=list)
    statements_after: list[str] = field(default_factory=list)
    queries_after: list[str] = field(default_factory=list)

    def statements(self) -> list[str]:
        """Statements-before, CREATE TABLE, statements-after, then queries-after."""
        return [
            *self.statements_before,
            self.create_table,
            *self.statements_after,
            *self.queries_after,
        ]


def build_create_table(
    dialect: Dialect, table: TableSchema, *, if_not_exists: bool = False
) -> CreateTablePlan:
    """Render CREATE TABLE for ``table`` plus its companion statements."""
    if if_not_exists and not dialect.capabilities.create_if_not_exists:
        raise UnsupportedCapabilityError(dialect.name, "CREATE TABLE IF NOT EXISTS")

    ctx = DdlContext(table_name=table.name)
    columns = [dialect.column_definition_sql(f, ctx) for f in table.fields]

    head = "CREATE TABLE IF NOT EXISTS" if if_not_exists else "CREATE TABLE"
    body = ", ".join([*columns, *ctx.additional_args])
    sql = f"{head} {dialect.quote_identifier(table.name)} ({body}){dialect.create_table_suffix()}"

    logger.debug(
        "Rendered %s table %s (%d before, %d after, %d queries)",
        dialect.name,
        table.name,
        len(ctx.statements_before),
        len(ctx.statements_after),
        len(ctx.queries_after),
    )
    return CreateTablePlan(
        table_name=table.name,
        create_table=sql,
        statements_before=ctx.statements_before,
        statements_after=ctx.statements_after,
        queries_after=ctx.queries_after,
    )


def build_drop_table(
    dialect: Dialect, table: TableSchema, *, if_exists: bool = False
) -> list[str]:
    """Render DROP TABLE for ``table`` followed by any dialect cleanup."""
    ctx = DdlContext(table_name=table.name)
    for f in table.fields:
        dialect.drop_column_sql(f, ctx)
    head = "DROP TABLE IF EXISTS" if if_exists else "DROP TABLE"
    return [
        *ctx.statements_before,
        f"{head} {dialect.quote_identifier(table.name)}",
        *ctx.statements_after,
    ]
