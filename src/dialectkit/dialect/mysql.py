"""MySQL dialect implementation."""

from __future__ import annotations

from dialectkit.dialect.base import DdlContext, Dialect, DialectCapabilities
from dialectkit.dialect.registry import DialectRegistry
from dialectkit.models.field import LogicalField


@DialectRegistry.register
class MySqlDialect(Dialect):
    """MySQL dialect: backtick quoting, AUTO_INCREMENT ids, InnoDB tables."""

    _QUOTE_CHAR = "`"

    @property
    def name(self) -> str:
        return "mysql"

    @property
    def database_name(self) -> str:
        return "MySQL"

    @property
    def driver_name(self) -> str:
        return "pymysql"

    @property
    def capabilities(self) -> DialectCapabilities:
        return DialectCapabilities(offset_requires_limit=True)

    def date_type_sql(self, field: LogicalField) -> str:
        return "DATETIME"

    def configure_generated_id(self, field: LogicalField, ctx: DdlContext) -> str:
        return " ".join(p for p in ("AUTO_INCREMENT", self.configure_id(field, ctx)) if p)

    def create_table_suffix(self) -> str:
        return " ENGINE=InnoDB"
