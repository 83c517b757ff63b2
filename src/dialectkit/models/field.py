"""Logical field and table descriptions consumed by the dialects."""

from __future__ import annotations

from datetime import date
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator, model_validator


class SqlType(StrEnum):
    STRING = "string"
    LONG_STRING = "long_string"
    CHAR = "char"
    BOOLEAN = "boolean"
    DATE = "date"
    BYTE = "byte"
    BYTE_ARRAY = "byte_array"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    SERIALIZED_OBJECT = "serialized_object"
    DECIMAL = "decimal"
    UUID = "uuid"


class LogicalField(BaseModel):
    """A database-agnostic column: name, semantic type, width and id flags."""

    name: str = Field(min_length=1)
    sql_type: SqlType = Field(alias="type")
    width: int = Field(0, ge=0)
    column_name: str | None = Field(None, alias="columnName")
    id: bool = False
    generated_id: bool = Field(False, alias="generatedId")
    generated_id_sequence: str | None = Field(None, alias="generatedIdSequence")
    allow_generated_id_insert: bool = Field(False, alias="allowGeneratedIdInsert")
    nullable: bool = True
    unique: bool = False
    default: str | None = None

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("default", mode="before")
    @classmethod
    def _stringify_default(cls, value: object) -> object:
        # YAML hands back ints/bools/dates for unquoted defaults
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int | float):
            return str(value)
        if isinstance(value, date):
            return value.isoformat()
        return value

    @model_validator(mode="after")
    def _check_id_flags(self) -> LogicalField:
        flags = [self.id, self.generated_id, self.generated_id_sequence is not None]
        if sum(flags) > 1:
            raise ValueError(
                f"Field '{self.name}' must set only one of id, generatedId, generatedIdSequence"
            )
        if self.allow_generated_id_insert and not self.is_generated_id:
            raise ValueError(
                f"Field '{self.name}' sets allowGeneratedIdInsert without a generated id"
            )
        return self

    @property
    def column(self) -> str:
        """Column name used in SQL (falls back to the field name)."""
        return self.column_name or self.name

    @property
    def is_generated_id(self) -> bool:
        return self.generated_id or self.generated_id_sequence is not None

    @property
    def is_id(self) -> bool:
        return self.id or self.is_generated_id


class TableSchema(BaseModel):
    """A named table made of logical fields."""

    name: str = Field(min_length=1)
    fields: list[LogicalField] = Field(min_length=1)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_columns(self) -> TableSchema:
        seen: set[str] = set()
        for f in self.fields:
            if f.column in seen:
                raise ValueError(f"Table '{self.name}' has duplicate column '{f.column}'")
            seen.add(f.column)
        id_fields = [f.name for f in self.fields if f.is_id]
        if len(id_fields) > 1:
            raise ValueError(
                f"Table '{self.name}' has more than one id field: {', '.join(id_fields)}"
            )
        return self

    @property
    def id_field(self) -> LogicalField | None:
        return next((f for f in self.fields if f.is_id), None)
