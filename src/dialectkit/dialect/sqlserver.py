"""Microsoft SQL Server dialect implementation."""

from __future__ import annotations

from typing import Any

from dialectkit.converters.base import ResultCursor, TypeConverter
from dialectkit.converters.defaults import BooleanNumberConverter, parse_int
from dialectkit.dialect.base import DdlContext, Dialect, DialectCapabilities
from dialectkit.dialect.registry import DialectRegistry
from dialectkit.models.field import LogicalField, SqlType

_BYTE_MIN = -128
_BYTE_MAX = 127


class _ByteAsSmallIntConverter(TypeConverter):
    """Bytes live in a SMALLINT column: TINYINT is unsigned 0-255 here."""

    @property
    def sql_type(self) -> SqlType:
        return SqlType.BYTE

    def to_storage(self, field: LogicalField, value: Any) -> Any:
        # widening, always fits
        return None if value is None else int(value)

    def from_storage(self, field: LogicalField, cursor: ResultCursor, column: int) -> Any:
        value = cursor.get_short(column)
        if value is None:
            return None
        # rows written by other clients may not fit in a byte: clamp, never fail
        if value < _BYTE_MIN:
            return _BYTE_MIN
        if value > _BYTE_MAX:
            return _BYTE_MAX
        return value

    def parse_default(self, field: LogicalField, text: str) -> Any:
        return parse_int(field, text, SqlType.SHORT)


@DialectRegistry.register
class SqlServerDialect(Dialect):
    """SQL Server dialect: IDENTITY ids, TOP n, BIT booleans, no OFFSET."""

    _CONVERTER_OVERRIDES = {
        SqlType.BOOLEAN: BooleanNumberConverter(),
        SqlType.BYTE: _ByteAsSmallIntConverter(),
    }

    @property
    def name(self) -> str:
        return "sqlserver"

    @property
    def database_name(self) -> str:
        return "SQL Server"

    @property
    def driver_name(self) -> str:
        return "pyodbc"

    @property
    def capabilities(self) -> DialectCapabilities:
        return DialectCapabilities(
            supports_offset=False,
            limit_after_select=True,
            # IDENTITY_INSERT is a per-session toggle, not a schema setting
            allow_generated_id_insert=False,
            create_if_not_exists=False,
        )

    def boolean_type_sql(self, field: LogicalField) -> str:
        return "BIT"

    def byte_type_sql(self, field: LogicalField) -> str:
        return "SMALLINT"

    def date_type_sql(self, field: LogicalField) -> str:
        # TIMESTAMP is a row version type here, not a point in time
        return "DATETIME"

    def byte_array_type_sql(self, field: LogicalField) -> str:
        return "IMAGE"

    def serialized_type_sql(self, field: LogicalField) -> str:
        return "IMAGE"

    def configure_generated_id(self, field: LogicalField, ctx: DdlContext) -> str:
        parts = ["IDENTITY", self.configure_id(field, ctx)]
        if field.allow_generated_id_insert:
            # untested against a live server; emitted whenever the field asks for it
            table = self.quote_identifier(ctx.table_name)
            ctx.statements_after.append(f"SET IDENTITY_INSERT {table} ON")
        return " ".join(p for p in parts if p)

    def limit_sql(self, limit: int, offset: int | None = None) -> str:
        return f"TOP {limit} "
