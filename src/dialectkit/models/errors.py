"""Structured error models with YAML source position tracking."""

from __future__ import annotations

from pydantic import BaseModel


class SourceSpan(BaseModel):
    """Points to exact location in YAML source for error reporting."""

    file: str
    line: int
    column: int


class SchemaError(BaseModel):
    """A structured schema error with optional source position."""

    code: str
    message: str
    path: str | None = None
    span: SourceSpan | None = None
