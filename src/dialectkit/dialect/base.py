"""Abstract base dialect with capability flags and default DDL rendering."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar

from dialectkit.converters.base import TypeConverter
from dialectkit.converters.defaults import DEFAULT_CONVERTERS
from dialectkit.models.field import LogicalField, SqlType


class UnsupportedCapabilityError(Exception):
    """Raised when a caller asks a dialect for something it cannot express."""

    def __init__(self, dialect_name: str, feature: str) -> None:
        self.dialect_name = dialect_name
        self.feature = feature
        super().__init__(f"{feature} is not supported by the '{dialect_name}' dialect")


@dataclass(frozen=True)
class DialectCapabilities:
    """Flags indicating what a dialect supports at schema-definition time."""

    supports_limit: bool = True
    supports_offset: bool = True
    limit_after_select: bool = False
    offset_requires_limit: bool = False
    allow_generated_id_insert: bool = True
    generated_id_sequence: bool = False
    create_if_not_exists: bool = True


@dataclass
class DdlContext:
    """Side-channel output of one table-creation pass.

    Dialects append to these lists while rendering column definitions; the
    caller runs them in order: statements_before, the CREATE TABLE itself,
    statements_after, then queries_after.  ``additional_args`` are extra
    clauses placed inside the CREATE TABLE parentheses after the columns.
    """

    table_name: str
    statements_before: list[str] = field(default_factory=list)
    statements_after: list[str] = field(default_factory=list)
    additional_args: list[str] = field(default_factory=list)
    queries_after: list[str] = field(default_factory=list)


class Dialect(ABC):
    """Abstract base for all SQL dialects.

    Provides a generic rendering and converter for every ``SqlType``;
    dialects override only the methods and converters that differ.
    """

    DEFAULT_VARCHAR_WIDTH: ClassVar[int] = 255
    DEFAULT_UUID_WIDTH: ClassVar[int] = 48

    # Sparse per-dialect overrides, consulted before DEFAULT_CONVERTERS
    _CONVERTER_OVERRIDES: ClassVar[dict[SqlType, TypeConverter]] = {}

    _QUOTE_CHAR: ClassVar[str] = '"'

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def database_name(self) -> str: ...

    @property
    @abstractmethod
    def driver_name(self) -> str:
        """Opaque driver identifier handed to whatever opens connections."""

    @property
    @abstractmethod
    def capabilities(self) -> DialectCapabilities: ...

    def matches_url_scheme(self, scheme: str) -> bool:
        """True when ``scheme`` (from a connection URL) names this dialect."""
        return scheme == self.name

    # -- type conversion -------------------------------------------------------

    def converter_for(self, sql_type: SqlType) -> TypeConverter:
        """Return the converter for ``sql_type``: override first, then default."""
        converter = self._CONVERTER_OVERRIDES.get(sql_type)
        if converter is None:
            converter = DEFAULT_CONVERTERS[sql_type]
        return converter

    # -- quoting ---------------------------------------------------------------

    def quote_identifier(self, name: str) -> str:
        """Quote a table/column name, doubling any embedded quote character."""
        q = self._QUOTE_CHAR
        escaped = name.replace(q, q + q)
        return f"{q}{escaped}{q}"

    def quote_literal(self, value: str) -> str:
        escaped = value.replace("'", "''")
        return f"'{escaped}'"

    # -- column types ----------------------------------------------------------

    def column_type_sql(self, field: LogicalField) -> str:
        """Render the vendor column type for a logical field."""
        match field.sql_type:
            case SqlType.STRING:
                return self.string_type_sql(field)
            case SqlType.LONG_STRING:
                return self.long_string_type_sql(field)
            case SqlType.CHAR:
                return self.char_type_sql(field)
            case SqlType.BOOLEAN:
                return self.boolean_type_sql(field)
            case SqlType.DATE:
                return self.date_type_sql(field)
            case SqlType.BYTE:
                return self.byte_type_sql(field)
            case SqlType.BYTE_ARRAY:
                return self.byte_array_type_sql(field)
            case SqlType.SHORT:
                return self.short_type_sql(field)
            case SqlType.INT:
                return self.int_type_sql(field)
            case SqlType.LONG:
                return self.long_type_sql(field)
            case SqlType.FLOAT:
                return self.float_type_sql(field)
            case SqlType.DOUBLE:
                return self.double_type_sql(field)
            case SqlType.SERIALIZED_OBJECT:
                return self.serialized_type_sql(field)
            case SqlType.DECIMAL:
                return self.decimal_type_sql(field)
            case SqlType.UUID:
                return self.uuid_type_sql(field)
            case _:
                raise ValueError(f"Unknown SQL type: {field.sql_type}")

    def string_type_sql(self, field: LogicalField) -> str:
        return f"VARCHAR({field.width or self.DEFAULT_VARCHAR_WIDTH})"

    def long_string_type_sql(self, field: LogicalField) -> str:
        return "TEXT"

    def char_type_sql(self, field: LogicalField) -> str:
        return "CHAR"

    def boolean_type_sql(self, field: LogicalField) -> str:
        return "BOOLEAN"

    def date_type_sql(self, field: LogicalField) -> str:
        return "TIMESTAMP"

    def byte_type_sql(self, field: LogicalField) -> str:
        return "TINYINT"

    def byte_array_type_sql(self, field: LogicalField) -> str:
        return "BLOB"

    def short_type_sql(self, field: LogicalField) -> str:
        return "SMALLINT"

    def int_type_sql(self, field: LogicalField) -> str:
        return "INTEGER"

    def long_type_sql(self, field: LogicalField) -> str:
        return "BIGINT"

    def float_type_sql(self, field: LogicalField) -> str:
        return "FLOAT"

    def double_type_sql(self, field: LogicalField) -> str:
        return "DOUBLE PRECISION"

    def serialized_type_sql(self, field: LogicalField) -> str:
        return "BLOB"

    def decimal_type_sql(self, field: LogicalField) -> str:
        return "NUMERIC"

    def uuid_type_sql(self, field: LogicalField) -> str:
        return f"VARCHAR({field.width or self.DEFAULT_UUID_WIDTH})"

    # -- column definitions ----------------------------------------------------

    def column_definition_sql(self, field: LogicalField, ctx: DdlContext) -> str:
        """Render one column definition, recording side statements in ``ctx``."""
        column = self.quote_identifier(field.column)
        parts = [column, self.column_type_sql(field)]
        if field.default is not None:
            parts.append(self.default_value_sql(field))

        if field.generated_id_sequence is not None and self.capabilities.generated_id_sequence:
            parts.append(
                self.configure_generated_id_sequence(field, field.generated_id_sequence, ctx)
            )
        elif field.is_generated_id:
            parts.append(self.configure_generated_id(field, ctx))
        elif field.id:
            parts.append(self.configure_id(field, ctx))

        if not field.is_generated_id:
            if not field.nullable:
                parts.append("NOT NULL")
            if field.unique:
                ctx.additional_args.append(f"UNIQUE ({column})")
        return " ".join(p for p in parts if p)

    def default_value_sql(self, field: LogicalField) -> str:
        """Render ``DEFAULT <literal>``; malformed defaults raise DefaultValueParseError."""
        assert field.default is not None
        converter = self.converter_for(field.sql_type)
        value = converter.parse_default(field, field.default)
        if isinstance(value, bool):
            literal = "TRUE" if value else "FALSE"
        elif converter.escaped_default:
            if isinstance(value, datetime):
                text = value.isoformat(sep=" ")
            elif isinstance(value, bytes):
                text = value.decode("utf-8")
            else:
                text = str(value)
            literal = self.quote_literal(text)
        else:
            literal = str(value)
        return f"DEFAULT {literal}"

    def configure_id(self, field: LogicalField, ctx: DdlContext) -> str:
        """Register the primary key constraint; adds nothing to the column text."""
        ctx.additional_args.append(f"PRIMARY KEY ({self.quote_identifier(field.column)})")
        return ""

    def configure_generated_id(self, field: LogicalField, ctx: DdlContext) -> str:
        raise UnsupportedCapabilityError(self.name, "Generated ids")

    def configure_generated_id_sequence(
        self, field: LogicalField, sequence_name: str, ctx: DdlContext
    ) -> str:
        raise UnsupportedCapabilityError(self.name, "Generated id sequences")

    def generated_id_sequence_name(self, table_name: str, field: LogicalField) -> str:
        return f"{table_name}_{field.column}_seq"

    def drop_column_sql(self, field: LogicalField, ctx: DdlContext) -> None:
        """Record statements needed when dropping the table holding ``field``."""

    def create_table_suffix(self) -> str:
        return ""

    # -- pagination ------------------------------------------------------------

    def limit_sql(self, limit: int, offset: int | None = None) -> str:
        return f"LIMIT {limit} "

    def offset_sql(self, offset: int) -> str:
        if not self.capabilities.supports_offset:
            raise UnsupportedCapabilityError(self.name, "OFFSET")
        return f"OFFSET {offset} "

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
