"""Type converter contract and the result cursor capability it reads from."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from datetime import datetime
    from decimal import Decimal

    from dialectkit.models.field import LogicalField, SqlType


class DefaultValueParseError(ValueError):
    """Raised when a field's default literal cannot be parsed for its type."""

    def __init__(self, field_name: str, text: str, reason: str) -> None:
        self.field_name = field_name
        self.text = text
        super().__init__(f"Invalid default '{text}' for field '{field_name}': {reason}")


class ResultCursor(Protocol):
    """Typed, positional column reads over an already-open result row.

    Every reader returns ``None`` for SQL NULL.
    """

    def get_string(self, column: int) -> str | None: ...

    def get_boolean(self, column: int) -> bool | None: ...

    def get_byte(self, column: int) -> int | None: ...

    def get_short(self, column: int) -> int | None: ...

    def get_int(self, column: int) -> int | None: ...

    def get_long(self, column: int) -> int | None: ...

    def get_float(self, column: int) -> float | None: ...

    def get_double(self, column: int) -> float | None: ...

    def get_decimal(self, column: int) -> Decimal | None: ...

    def get_timestamp(self, column: int) -> datetime | None: ...

    def get_bytes(self, column: int) -> bytes | None: ...


class TypeConverter(ABC):
    """Bidirectional mapping between a Python value and its column value.

    Converters are stateless and shared by every dialect that uses them.
    """

    is_stream_type: bool = False
    escaped_default: bool = False

    @property
    @abstractmethod
    def sql_type(self) -> SqlType: ...

    @abstractmethod
    def to_storage(self, field: LogicalField, value: Any) -> Any:
        """Convert a Python value into the argument bound for the column."""

    @abstractmethod
    def from_storage(self, field: LogicalField, cursor: ResultCursor, column: int) -> Any:
        """Read the column at ``column`` and convert it to a Python value."""

    @abstractmethod
    def parse_default(self, field: LogicalField, text: str) -> Any:
        """Parse a default literal into the value stored in the column."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.sql_type.value})"
