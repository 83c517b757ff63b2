"""``ResultCursor`` over a plain DB-API row tuple."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import Any


class RowCursor:
    """Adapts a DB-API row (``cursor.fetchone()``) to typed positional reads.

    Columns are 1-based to match the result cursor convention used by the
    converters.  Values are coerced to the requested Python type; ``None``
    stays ``None``.
    """

    def __init__(self, row: Sequence[Any]) -> None:
        self._row = row

    def _value(self, column: int) -> Any:
        if column < 1 or column > len(self._row):
            raise IndexError(f"Column {column} out of range (row has {len(self._row)} columns)")
        return self._row[column - 1]

    def get_string(self, column: int) -> str | None:
        value = self._value(column)
        return None if value is None else str(value)

    def get_boolean(self, column: int) -> bool | None:
        value = self._value(column)
        return None if value is None else bool(value)

    def get_byte(self, column: int) -> int | None:
        return self._int(column)

    def get_short(self, column: int) -> int | None:
        return self._int(column)

    def get_int(self, column: int) -> int | None:
        return self._int(column)

    def get_long(self, column: int) -> int | None:
        return self._int(column)

    def get_float(self, column: int) -> float | None:
        value = self._value(column)
        return None if value is None else float(value)

    def get_double(self, column: int) -> float | None:
        return self.get_float(column)

    def get_decimal(self, column: int) -> Decimal | None:
        value = self._value(column)
        if value is None or isinstance(value, Decimal):
            return value
        return Decimal(str(value))

    def get_timestamp(self, column: int) -> datetime | None:
        value = self._value(column)
        if value is None or isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day)
        # sqlite hands timestamps back as text
        return datetime.fromisoformat(str(value))

    def get_bytes(self, column: int) -> bytes | None:
        value = self._value(column)
        if value is None:
            return None
        if isinstance(value, bytes | bytearray | memoryview):
            return bytes(value)
        raise TypeError(f"Column {column} holds {type(value).__name__}, not binary data")

    def _int(self, column: int) -> int | None:
        value = self._value(column)
        return None if value is None else int(value)
