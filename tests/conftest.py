"""Shared test fixtures for dialectkit."""

from __future__ import annotations

from pathlib import Path

import pytest

from dialectkit.dialect import DialectRegistry
from dialectkit.dialect.mysql import MySqlDialect
from dialectkit.dialect.postgres import PostgresDialect
from dialectkit.dialect.sqlite import SqliteDialect
from dialectkit.dialect.sqlserver import SqlServerDialect
from dialectkit.models.field import LogicalField, SqlType, TableSchema
from dialectkit.parser.loader import SchemaLoader

FIXTURES_DIR = Path(__file__).parent / "fixtures"
SHOP_SCHEMA = FIXTURES_DIR / "shop_schema.yaml"


@pytest.fixture
def loader() -> SchemaLoader:
    return SchemaLoader()


@pytest.fixture
def sqlserver() -> SqlServerDialect:
    dialect = DialectRegistry.get("sqlserver")
    assert isinstance(dialect, SqlServerDialect)
    return dialect


@pytest.fixture
def postgres() -> PostgresDialect:
    dialect = DialectRegistry.get("postgres")
    assert isinstance(dialect, PostgresDialect)
    return dialect


@pytest.fixture
def mysql() -> MySqlDialect:
    dialect = DialectRegistry.get("mysql")
    assert isinstance(dialect, MySqlDialect)
    return dialect


@pytest.fixture
def sqlite() -> SqliteDialect:
    dialect = DialectRegistry.get("sqlite")
    assert isinstance(dialect, SqliteDialect)
    return dialect


@pytest.fixture
def identity_table() -> TableSchema:
    """A table whose generated id accepts explicit inserts."""
    return TableSchema(
        name="orders",
        fields=[
            LogicalField(
                name="id",
                sql_type=SqlType.INT,
                generated_id=True,
                allow_generated_id_insert=True,
            ),
            LogicalField(name="note", sql_type=SqlType.STRING, width=40),
        ],
    )


SAMPLE_SCHEMA_YAML = """\
tables:
  - name: accounts
    fields:
      - name: id
        type: int
        generatedId: true
      - name: owner
        type: string
        width: 64
        nullable: false
      - name: flags
        type: byte
"""
