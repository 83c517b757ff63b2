"""Type converters between Python values and database column values."""

from dialectkit.converters.base import DefaultValueParseError, ResultCursor, TypeConverter
from dialectkit.converters.cursor import RowCursor
from dialectkit.converters.defaults import DEFAULT_CONVERTERS, BooleanNumberConverter

__all__ = [
    "DEFAULT_CONVERTERS",
    "BooleanNumberConverter",
    "DefaultValueParseError",
    "ResultCursor",
    "RowCursor",
    "TypeConverter",
]
