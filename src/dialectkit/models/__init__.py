"""Pydantic domain models for dialectkit."""

from dialectkit.models.errors import SchemaError, SourceSpan
from dialectkit.models.field import LogicalField, SqlType, TableSchema

__all__ = [
    "LogicalField",
    "SchemaError",
    "SourceSpan",
    "SqlType",
    "TableSchema",
]
