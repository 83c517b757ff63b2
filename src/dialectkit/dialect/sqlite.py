"""SQLite dialect implementation."""

from __future__ import annotations

from dialectkit.converters.defaults import BooleanNumberConverter
from dialectkit.dialect.base import (
    DdlContext,
    Dialect,
    DialectCapabilities,
    UnsupportedCapabilityError,
)
from dialectkit.dialect.registry import DialectRegistry
from dialectkit.models.field import LogicalField, SqlType


@DialectRegistry.register
class SqliteDialect(Dialect):
    """SQLite dialect: inline AUTOINCREMENT keys, booleans stored as 0/1."""

    _CONVERTER_OVERRIDES = {
        SqlType.BOOLEAN: BooleanNumberConverter(),
    }

    _QUOTE_CHAR = "`"

    @property
    def name(self) -> str:
        return "sqlite"

    @property
    def database_name(self) -> str:
        return "SQLite"

    @property
    def driver_name(self) -> str:
        return "sqlite3"

    @property
    def capabilities(self) -> DialectCapabilities:
        return DialectCapabilities(offset_requires_limit=True)

    def long_type_sql(self, field: LogicalField) -> str:
        # AUTOINCREMENT is only accepted on a column declared exactly INTEGER
        if field.is_generated_id:
            return "INTEGER"
        return super().long_type_sql(field)

    def configure_generated_id(self, field: LogicalField, ctx: DdlContext) -> str:
        if field.sql_type not in (SqlType.INT, SqlType.LONG):
            raise UnsupportedCapabilityError(
                self.name, f"Generated id of type {field.sql_type.value}"
            )
        return "PRIMARY KEY AUTOINCREMENT"
