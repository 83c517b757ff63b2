"""Generic converters: the fallback for every semantic type on every dialect."""

from __future__ import annotations

import math
import pickle
import uuid
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from dialectkit.converters.base import DefaultValueParseError, ResultCursor, TypeConverter
from dialectkit.models.field import LogicalField, SqlType

_INT_RANGES: dict[SqlType, tuple[int, int]] = {
    SqlType.BYTE: (-(2**7), 2**7 - 1),
    SqlType.SHORT: (-(2**15), 2**15 - 1),
    SqlType.INT: (-(2**31), 2**31 - 1),
    SqlType.LONG: (-(2**63), 2**63 - 1),
}


def parse_bool(field: LogicalField, text: str) -> bool:
    """Parse ``true``/``false`` (any case) or raise ``DefaultValueParseError``."""
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise DefaultValueParseError(field.name, text, "expected 'true' or 'false'")


def parse_int(field: LogicalField, text: str, sql_type: SqlType) -> int:
    """Parse an integer literal bounded by the range of ``sql_type``."""
    try:
        value = int(text.strip())
    except ValueError:
        raise DefaultValueParseError(field.name, text, "not an integer") from None
    low, high = _INT_RANGES[sql_type]
    if not low <= value <= high:
        raise DefaultValueParseError(
            field.name, text, f"outside {sql_type.value} range {low}..{high}"
        )
    return value


class StringConverter(TypeConverter):
    escaped_default = True

    def __init__(self, sql_type: SqlType = SqlType.STRING) -> None:
        self._sql_type = sql_type

    @property
    def sql_type(self) -> SqlType:
        return self._sql_type

    def to_storage(self, field: LogicalField, value: Any) -> Any:
        return None if value is None else str(value)

    def from_storage(self, field: LogicalField, cursor: ResultCursor, column: int) -> Any:
        return cursor.get_string(column)

    def parse_default(self, field: LogicalField, text: str) -> Any:
        return text


class CharConverter(StringConverter):
    def __init__(self) -> None:
        super().__init__(SqlType.CHAR)

    def to_storage(self, field: LogicalField, value: Any) -> Any:
        if value is not None and len(str(value)) != 1:
            raise ValueError(f"Field '{field.name}' expects a single character, got {value!r}")
        return super().to_storage(field, value)

    def parse_default(self, field: LogicalField, text: str) -> Any:
        if len(text) != 1:
            raise DefaultValueParseError(field.name, text, "expected a single character")
        return text


class BooleanConverter(TypeConverter):
    @property
    def sql_type(self) -> SqlType:
        return SqlType.BOOLEAN

    def to_storage(self, field: LogicalField, value: Any) -> Any:
        return None if value is None else bool(value)

    def from_storage(self, field: LogicalField, cursor: ResultCursor, column: int) -> Any:
        return cursor.get_boolean(column)

    def parse_default(self, field: LogicalField, text: str) -> Any:
        return parse_bool(field, text)


class BooleanNumberConverter(TypeConverter):
    """Booleans stored as 1/0 in a numeric or bit column."""

    @property
    def sql_type(self) -> SqlType:
        return SqlType.BOOLEAN

    def to_storage(self, field: LogicalField, value: Any) -> Any:
        if value is None:
            return None
        return 1 if value else 0

    def from_storage(self, field: LogicalField, cursor: ResultCursor, column: int) -> Any:
        value = cursor.get_int(column)
        return None if value is None else value != 0

    def parse_default(self, field: LogicalField, text: str) -> Any:
        return 1 if parse_bool(field, text) else 0


class DateConverter(TypeConverter):
    escaped_default = True

    @property
    def sql_type(self) -> SqlType:
        return SqlType.DATE

    def to_storage(self, field: LogicalField, value: Any) -> Any:
        return value

    def from_storage(self, field: LogicalField, cursor: ResultCursor, column: int) -> Any:
        return cursor.get_timestamp(column)

    def parse_default(self, field: LogicalField, text: str) -> Any:
        try:
            return datetime.fromisoformat(text.strip())
        except ValueError:
            raise DefaultValueParseError(field.name, text, "not an ISO-8601 timestamp") from None


class IntegerConverter(TypeConverter):
    """BYTE, SHORT, INT and LONG share one converter parameterised by reader."""

    _READERS: dict[SqlType, str] = {
        SqlType.BYTE: "get_byte",
        SqlType.SHORT: "get_short",
        SqlType.INT: "get_int",
        SqlType.LONG: "get_long",
    }

    def __init__(self, sql_type: SqlType) -> None:
        if sql_type not in self._READERS:
            raise ValueError(f"{sql_type.value} is not an integer type")
        self._sql_type = sql_type

    @property
    def sql_type(self) -> SqlType:
        return self._sql_type

    def to_storage(self, field: LogicalField, value: Any) -> Any:
        return None if value is None else int(value)

    def from_storage(self, field: LogicalField, cursor: ResultCursor, column: int) -> Any:
        return getattr(cursor, self._READERS[self._sql_type])(column)

    def parse_default(self, field: LogicalField, text: str) -> Any:
        return parse_int(field, text, self._sql_type)


class FloatConverter(TypeConverter):
    def __init__(self, sql_type: SqlType) -> None:
        self._sql_type = sql_type

    @property
    def sql_type(self) -> SqlType:
        return self._sql_type

    def to_storage(self, field: LogicalField, value: Any) -> Any:
        return None if value is None else float(value)

    def from_storage(self, field: LogicalField, cursor: ResultCursor, column: int) -> Any:
        if self._sql_type is SqlType.FLOAT:
            return cursor.get_float(column)
        return cursor.get_double(column)

    def parse_default(self, field: LogicalField, text: str) -> Any:
        try:
            value = float(text)
        except ValueError:
            raise DefaultValueParseError(field.name, text, "not a number") from None
        # inf/nan have no portable SQL literal
        if not math.isfinite(value):
            raise DefaultValueParseError(field.name, text, "not a finite number")
        return value


class DecimalConverter(TypeConverter):
    @property
    def sql_type(self) -> SqlType:
        return SqlType.DECIMAL

    def to_storage(self, field: LogicalField, value: Any) -> Any:
        if value is None or isinstance(value, Decimal):
            return value
        return Decimal(str(value))

    def from_storage(self, field: LogicalField, cursor: ResultCursor, column: int) -> Any:
        return cursor.get_decimal(column)

    def parse_default(self, field: LogicalField, text: str) -> Any:
        try:
            value = Decimal(text.strip())
        except InvalidOperation:
            raise DefaultValueParseError(field.name, text, "not a decimal") from None
        if not value.is_finite():
            raise DefaultValueParseError(field.name, text, "not a finite number")
        return value


class UuidConverter(TypeConverter):
    escaped_default = True

    @property
    def sql_type(self) -> SqlType:
        return SqlType.UUID

    def to_storage(self, field: LogicalField, value: Any) -> Any:
        return None if value is None else str(uuid.UUID(str(value)))

    def from_storage(self, field: LogicalField, cursor: ResultCursor, column: int) -> Any:
        text = cursor.get_string(column)
        return None if text is None else uuid.UUID(text)

    def parse_default(self, field: LogicalField, text: str) -> Any:
        try:
            return str(uuid.UUID(text.strip()))
        except ValueError:
            raise DefaultValueParseError(field.name, text, "not a UUID") from None


class ByteArrayConverter(TypeConverter):
    is_stream_type = True
    escaped_default = True

    @property
    def sql_type(self) -> SqlType:
        return SqlType.BYTE_ARRAY

    def to_storage(self, field: LogicalField, value: Any) -> Any:
        return None if value is None else bytes(value)

    def from_storage(self, field: LogicalField, cursor: ResultCursor, column: int) -> Any:
        return cursor.get_bytes(column)

    def parse_default(self, field: LogicalField, text: str) -> Any:
        return text.encode("utf-8")


class SerializedObjectConverter(TypeConverter):
    """Arbitrary Python objects pickled into a binary column.

    Only read rows written by trusted code: unpickling runs arbitrary code.
    """

    is_stream_type = True

    @property
    def sql_type(self) -> SqlType:
        return SqlType.SERIALIZED_OBJECT

    def to_storage(self, field: LogicalField, value: Any) -> Any:
        return None if value is None else pickle.dumps(value)

    def from_storage(self, field: LogicalField, cursor: ResultCursor, column: int) -> Any:
        data = cursor.get_bytes(column)
        return None if data is None else pickle.loads(data)  # noqa: S301

    def parse_default(self, field: LogicalField, text: str) -> Any:
        raise DefaultValueParseError(
            field.name, text, "default values are not supported for serialized objects"
        )


DEFAULT_CONVERTERS: dict[SqlType, TypeConverter] = {
    SqlType.STRING: StringConverter(SqlType.STRING),
    SqlType.LONG_STRING: StringConverter(SqlType.LONG_STRING),
    SqlType.CHAR: CharConverter(),
    SqlType.BOOLEAN: BooleanConverter(),
    SqlType.DATE: DateConverter(),
    SqlType.BYTE: IntegerConverter(SqlType.BYTE),
    SqlType.BYTE_ARRAY: ByteArrayConverter(),
    SqlType.SHORT: IntegerConverter(SqlType.SHORT),
    SqlType.INT: IntegerConverter(SqlType.INT),
    SqlType.LONG: IntegerConverter(SqlType.LONG),
    SqlType.FLOAT: FloatConverter(SqlType.FLOAT),
    SqlType.DOUBLE: FloatConverter(SqlType.DOUBLE),
    SqlType.SERIALIZED_OBJECT: SerializedObjectConverter(),
    SqlType.DECIMAL: DecimalConverter(),
    SqlType.UUID: UuidConverter(),
}
