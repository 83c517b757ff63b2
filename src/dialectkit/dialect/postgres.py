"""PostgreSQL dialect implementation."""

from __future__ import annotations

from dialectkit.dialect.base import DdlContext, Dialect, DialectCapabilities
from dialectkit.dialect.registry import DialectRegistry
from dialectkit.models.field import LogicalField

_URL_SCHEMES = frozenset({"postgres", "postgresql"})


@DialectRegistry.register
class PostgresDialect(Dialect):
    """PostgreSQL dialect: sequence-backed ids, BYTEA binaries."""

    @property
    def name(self) -> str:
        return "postgres"

    @property
    def database_name(self) -> str:
        return "PostgreSQL"

    @property
    def driver_name(self) -> str:
        return "psycopg"

    @property
    def capabilities(self) -> DialectCapabilities:
        return DialectCapabilities(generated_id_sequence=True)

    def matches_url_scheme(self, scheme: str) -> bool:
        return scheme in _URL_SCHEMES

    def byte_type_sql(self, field: LogicalField) -> str:
        return "SMALLINT"

    def byte_array_type_sql(self, field: LogicalField) -> str:
        return "BYTEA"

    def serialized_type_sql(self, field: LogicalField) -> str:
        return "BYTEA"

    def configure_generated_id(self, field: LogicalField, ctx: DdlContext) -> str:
        sequence_name = self.generated_id_sequence_name(ctx.table_name, field)
        return self.configure_generated_id_sequence(field, sequence_name, ctx)

    def configure_generated_id_sequence(
        self, field: LogicalField, sequence_name: str, ctx: DdlContext
    ) -> str:
        sequence = self.quote_identifier(sequence_name)
        ctx.statements_before.append(f"CREATE SEQUENCE {sequence}")
        default = f"DEFAULT NEXTVAL({self.quote_literal(sequence)})"
        return " ".join(p for p in (default, self.configure_id(field, ctx)) if p)

    def drop_column_sql(self, field: LogicalField, ctx: DdlContext) -> None:
        if not field.is_generated_id:
            return
        sequence_name = field.generated_id_sequence or self.generated_id_sequence_name(
            ctx.table_name, field
        )
        ctx.statements_after.append(f"DROP SEQUENCE {self.quote_identifier(sequence_name)}")
