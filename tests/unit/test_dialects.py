"""Tests for the dialect registry and per-vendor fragment rendering."""

from __future__ import annotations

from dataclasses import asdict

import pytest

from dialectkit.converters.defaults import DEFAULT_CONVERTERS, BooleanNumberConverter
from dialectkit.dialect import DialectRegistry
from dialectkit.dialect.base import DdlContext, UnsupportedCapabilityError
from dialectkit.dialect.mysql import MySqlDialect
from dialectkit.dialect.postgres import PostgresDialect
from dialectkit.dialect.registry import UnsupportedDialectError, url_scheme
from dialectkit.dialect.sqlite import SqliteDialect
from dialectkit.dialect.sqlserver import SqlServerDialect
from dialectkit.models.field import LogicalField, SqlType


def _field(sql_type: SqlType, name: str = "col", **kwargs) -> LogicalField:
    return LogicalField(name=name, sql_type=sql_type, **kwargs)


class TestDialectRegistry:
    def test_available_dialects(self) -> None:
        assert DialectRegistry.available() == ["mysql", "postgres", "sqlite", "sqlserver"]

    def test_get_returns_shared_instance(self) -> None:
        assert DialectRegistry.get("sqlserver") is DialectRegistry.get("sqlserver")
        assert isinstance(DialectRegistry.get("sqlserver"), SqlServerDialect)

    def test_dialects_view_is_read_only(self) -> None:
        view = DialectRegistry.dialects()
        assert view["sqlserver"] is DialectRegistry.get("sqlserver")
        with pytest.raises(TypeError):
            view["oracle"] = view["sqlserver"]  # type: ignore[index]
        assert "oracle" not in DialectRegistry.available()

    def test_unsupported_dialect_error(self) -> None:
        with pytest.raises(UnsupportedDialectError) as exc_info:
            DialectRegistry.get("oracle")
        assert "oracle" in str(exc_info.value)
        assert "sqlserver" in str(exc_info.value)
        assert exc_info.value.available == DialectRegistry.available()

    def test_resolve_by_scheme(self) -> None:
        assert isinstance(DialectRegistry.resolve("sqlserver"), SqlServerDialect)
        assert isinstance(DialectRegistry.resolve("postgresql"), PostgresDialect)

    def test_resolve_is_exact(self) -> None:
        with pytest.raises(UnsupportedDialectError):
            DialectRegistry.resolve("SQLSERVER")
        with pytest.raises(UnsupportedDialectError):
            DialectRegistry.resolve("sqlserver2019")

    def test_resolve_never_guesses(self) -> None:
        with pytest.raises(UnsupportedDialectError):
            DialectRegistry.resolve("")

    def test_for_url(self) -> None:
        dialect = DialectRegistry.for_url("sqlserver://db.local:1433/shop")
        assert isinstance(dialect, SqlServerDialect)
        assert isinstance(DialectRegistry.for_url("mysql+pymysql://u@h/db"), MySqlDialect)
        assert isinstance(DialectRegistry.for_url("sqlite:///tmp/shop.db"), SqliteDialect)

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("sqlserver://host/db", "sqlserver"),
            ("postgres+psycopg://host/db", "postgres"),
            ("sqlite:///file.db", "sqlite"),
            ("mysql", "mysql"),
        ],
    )
    def test_url_scheme(self, url: str, expected: str) -> None:
        assert url_scheme(url) == expected


class TestBaseRendering:
    """Generic defaults, exercised through a dialect that overrides none of them."""

    @pytest.mark.parametrize(
        ("sql_type", "expected"),
        [
            (SqlType.STRING, "VARCHAR(255)"),
            (SqlType.LONG_STRING, "TEXT"),
            (SqlType.CHAR, "CHAR"),
            (SqlType.BOOLEAN, "BOOLEAN"),
            (SqlType.DATE, "TIMESTAMP"),
            (SqlType.BYTE, "TINYINT"),
            (SqlType.BYTE_ARRAY, "BLOB"),
            (SqlType.SHORT, "SMALLINT"),
            (SqlType.INT, "INTEGER"),
            (SqlType.LONG, "BIGINT"),
            (SqlType.FLOAT, "FLOAT"),
            (SqlType.DOUBLE, "DOUBLE PRECISION"),
            (SqlType.SERIALIZED_OBJECT, "BLOB"),
            (SqlType.DECIMAL, "NUMERIC"),
            (SqlType.UUID, "VARCHAR(48)"),
        ],
    )
    def test_sqlite_uses_generic_types(
        self, sqlite: SqliteDialect, sql_type: SqlType, expected: str
    ) -> None:
        assert sqlite.column_type_sql(_field(sql_type)) == expected

    def test_string_width(self, postgres: PostgresDialect) -> None:
        assert postgres.column_type_sql(_field(SqlType.STRING, width=30)) == "VARCHAR(30)"

    def test_quote_literal(self, postgres: PostgresDialect) -> None:
        assert postgres.quote_literal("it's") == "'it''s'"

    def test_not_null_and_unique(self, postgres: PostgresDialect) -> None:
        ctx = DdlContext(table_name="t")
        sql = postgres.column_definition_sql(
            _field(SqlType.STRING, name="email", nullable=False, unique=True), ctx
        )
        assert sql == '"email" VARCHAR(255) NOT NULL'
        assert ctx.additional_args == ['UNIQUE ("email")']

    def test_plain_id_adds_primary_key(self, postgres: PostgresDialect) -> None:
        ctx = DdlContext(table_name="t")
        sql = postgres.column_definition_sql(_field(SqlType.STRING, name="code", id=True), ctx)
        assert sql == '"code" VARCHAR(255)'
        assert ctx.additional_args == ['PRIMARY KEY ("code")']

    def test_column_name_override(self, postgres: PostgresDialect) -> None:
        ctx = DdlContext(table_name="t")
        sql = postgres.column_definition_sql(
            _field(SqlType.INT, name="count", column_name="item_count"), ctx
        )
        assert sql == '"item_count" INTEGER'

    def test_defaults(self, postgres: PostgresDialect) -> None:
        ctx = DdlContext(table_name="t")
        assert (
            postgres.column_definition_sql(_field(SqlType.STRING, default="o'k"), ctx)
            == "\"col\" VARCHAR(255) DEFAULT 'o''k'"
        )
        assert (
            postgres.column_definition_sql(_field(SqlType.BOOLEAN, default="true"), ctx)
            == '"col" BOOLEAN DEFAULT TRUE'
        )
        assert (
            postgres.column_definition_sql(_field(SqlType.INT, default="7"), ctx)
            == '"col" INTEGER DEFAULT 7'
        )
        assert (
            postgres.column_definition_sql(_field(SqlType.DATE, default="2020-01-01T00:00:00"), ctx)
            == "\"col\" TIMESTAMP DEFAULT '2020-01-01 00:00:00'"
        )

    def test_malformed_default_propagates(self, postgres: PostgresDialect) -> None:
        with pytest.raises(ValueError, match="not an integer"):
            postgres.column_definition_sql(
                _field(SqlType.INT, default="seven"), DdlContext(table_name="t")
            )

    def test_converter_fallback(self, postgres: PostgresDialect) -> None:
        for sql_type in SqlType:
            assert postgres.converter_for(sql_type) is DEFAULT_CONVERTERS[sql_type]


class TestSqlServerDialect:
    def test_identity(self, sqlserver: SqlServerDialect) -> None:
        assert sqlserver.name == "sqlserver"
        assert sqlserver.database_name == "SQL Server"
        assert sqlserver.driver_name == "pyodbc"

    def test_capabilities(self, sqlserver: SqlServerDialect) -> None:
        caps = sqlserver.capabilities
        assert caps.supports_offset is False
        assert caps.limit_after_select is True
        assert caps.allow_generated_id_insert is False
        assert caps.create_if_not_exists is False

    def test_converter_overrides(self, sqlserver: SqlServerDialect) -> None:
        assert isinstance(sqlserver.converter_for(SqlType.BOOLEAN), BooleanNumberConverter)
        assert sqlserver.converter_for(SqlType.BYTE) is not DEFAULT_CONVERTERS[SqlType.BYTE]
        assert sqlserver.converter_for(SqlType.INT) is DEFAULT_CONVERTERS[SqlType.INT]
        assert sqlserver.converter_for(SqlType.STRING) is DEFAULT_CONVERTERS[SqlType.STRING]

    @pytest.mark.parametrize(
        ("sql_type", "expected"),
        [
            (SqlType.BOOLEAN, "BIT"),
            (SqlType.BYTE, "SMALLINT"),
            (SqlType.DATE, "DATETIME"),
            (SqlType.BYTE_ARRAY, "IMAGE"),
            (SqlType.SERIALIZED_OBJECT, "IMAGE"),
            (SqlType.INT, "INTEGER"),
        ],
    )
    def test_column_types(
        self, sqlserver: SqlServerDialect, sql_type: SqlType, expected: str
    ) -> None:
        assert sqlserver.column_type_sql(_field(sql_type)) == expected

    def test_binary_types_ignore_width(self, sqlserver: SqlServerDialect) -> None:
        assert sqlserver.column_type_sql(_field(SqlType.BYTE_ARRAY, width=500)) == "IMAGE"

    def test_quote_identifier(self, sqlserver: SqlServerDialect) -> None:
        assert sqlserver.quote_identifier("order") == '"order"'

    @pytest.mark.parametrize("name", ["order", "select", "my table", "col-1", "naïve", "a.b"])
    def test_quoted_identifier_strips_back(self, sqlserver: SqlServerDialect, name: str) -> None:
        quoted = sqlserver.quote_identifier(name)
        assert quoted[0] == quoted[-1] == '"'
        assert quoted[1:-1] == name

    def test_limit_is_top(self, sqlserver: SqlServerDialect) -> None:
        assert sqlserver.limit_sql(10) == "TOP 10 "
        assert sqlserver.limit_sql(10, None) == "TOP 10 "
        assert sqlserver.limit_sql(10, 50) == "TOP 10 "

    def test_offset_unsupported(self, sqlserver: SqlServerDialect) -> None:
        with pytest.raises(UnsupportedCapabilityError, match="OFFSET"):
            sqlserver.offset_sql(5)

    def test_generated_id_starts_with_identity(self, sqlserver: SqlServerDialect) -> None:
        ctx = DdlContext(table_name="orders")
        field = _field(SqlType.INT, name="id", generated_id=True, allow_generated_id_insert=True)
        fragment = sqlserver.configure_generated_id(field, ctx)
        assert fragment.startswith("IDENTITY")
        assert ctx.statements_after == ['SET IDENTITY_INSERT "orders" ON']
        assert ctx.additional_args == ['PRIMARY KEY ("id")']

    def test_generated_id_without_insert(self, sqlserver: SqlServerDialect) -> None:
        ctx = DdlContext(table_name="orders")
        sqlserver.configure_generated_id(_field(SqlType.INT, name="id", generated_id=True), ctx)
        assert ctx.statements_after == []

    def test_generated_id_column(self, sqlserver: SqlServerDialect) -> None:
        ctx = DdlContext(table_name="orders")
        sql = sqlserver.column_definition_sql(
            _field(SqlType.INT, name="id", generated_id=True, nullable=False), ctx
        )
        assert sql == '"id" INTEGER IDENTITY'

    def test_boolean_default_is_numeric(self, sqlserver: SqlServerDialect) -> None:
        ctx = DdlContext(table_name="t")
        sql = sqlserver.column_definition_sql(_field(SqlType.BOOLEAN, default="true"), ctx)
        assert sql == '"col" BIT DEFAULT 1'


class TestPostgresDialect:
    def test_capabilities(self, postgres: PostgresDialect) -> None:
        assert postgres.capabilities.generated_id_sequence is True
        assert postgres.capabilities.supports_offset is True

    def test_capability_flags(self, postgres: PostgresDialect) -> None:
        assert sorted(asdict(postgres.capabilities)) == [
            "allow_generated_id_insert",
            "create_if_not_exists",
            "generated_id_sequence",
            "limit_after_select",
            "offset_requires_limit",
            "supports_limit",
            "supports_offset",
        ]

    def test_quote_identifier_doubles_quotes(self, postgres: PostgresDialect) -> None:
        assert postgres.quote_identifier('has"quote') == '"has""quote"'

    def test_binary_types(self, postgres: PostgresDialect) -> None:
        assert postgres.column_type_sql(_field(SqlType.BYTE_ARRAY)) == "BYTEA"
        assert postgres.column_type_sql(_field(SqlType.SERIALIZED_OBJECT)) == "BYTEA"
        assert postgres.column_type_sql(_field(SqlType.BYTE)) == "SMALLINT"

    def test_generated_id_uses_sequence(self, postgres: PostgresDialect) -> None:
        ctx = DdlContext(table_name="orders")
        field = _field(SqlType.LONG, name="id", generated_id=True)
        sql = postgres.column_definition_sql(field, ctx)
        assert sql == "\"id\" BIGINT DEFAULT NEXTVAL('\"orders_id_seq\"')"
        assert ctx.statements_before == ['CREATE SEQUENCE "orders_id_seq"']
        assert ctx.additional_args == ['PRIMARY KEY ("id")']

    def test_named_sequence(self, postgres: PostgresDialect) -> None:
        ctx = DdlContext(table_name="orders")
        postgres.column_definition_sql(
            _field(SqlType.LONG, name="id", generated_id_sequence="order_ids"), ctx
        )
        assert ctx.statements_before == ['CREATE SEQUENCE "order_ids"']

    def test_drop_sequence(self, postgres: PostgresDialect) -> None:
        ctx = DdlContext(table_name="orders")
        postgres.drop_column_sql(_field(SqlType.LONG, name="id", generated_id=True), ctx)
        postgres.drop_column_sql(_field(SqlType.STRING, name="note"), ctx)
        assert ctx.statements_after == ['DROP SEQUENCE "orders_id_seq"']

    def test_limit_offset(self, postgres: PostgresDialect) -> None:
        assert postgres.limit_sql(10) == "LIMIT 10 "
        assert postgres.offset_sql(20) == "OFFSET 20 "


class TestMySqlDialect:
    def test_quote_identifier(self, mysql: MySqlDialect) -> None:
        assert mysql.quote_identifier("order") == "`order`"
        assert mysql.quote_identifier("a`b") == "`a``b`"

    def test_generated_id(self, mysql: MySqlDialect) -> None:
        ctx = DdlContext(table_name="orders")
        sql = mysql.column_definition_sql(_field(SqlType.INT, name="id", generated_id=True), ctx)
        assert sql == "`id` INTEGER AUTO_INCREMENT"
        assert ctx.additional_args == ["PRIMARY KEY (`id`)"]

    def test_generated_id_sequence_falls_back(self, mysql: MySqlDialect) -> None:
        ctx = DdlContext(table_name="orders")
        sql = mysql.column_definition_sql(
            _field(SqlType.INT, name="id", generated_id_sequence="ids"), ctx
        )
        assert sql == "`id` INTEGER AUTO_INCREMENT"
        assert ctx.statements_before == []

    def test_date_type(self, mysql: MySqlDialect) -> None:
        assert mysql.column_type_sql(_field(SqlType.DATE)) == "DATETIME"

    def test_table_suffix(self, mysql: MySqlDialect) -> None:
        assert mysql.create_table_suffix() == " ENGINE=InnoDB"


class TestSqliteDialect:
    def test_boolean_converter_override(self, sqlite: SqliteDialect) -> None:
        assert isinstance(sqlite.converter_for(SqlType.BOOLEAN), BooleanNumberConverter)

    def test_generated_long_id_is_integer(self, sqlite: SqliteDialect) -> None:
        ctx = DdlContext(table_name="orders")
        sql = sqlite.column_definition_sql(_field(SqlType.LONG, name="id", generated_id=True), ctx)
        assert sql == "`id` INTEGER PRIMARY KEY AUTOINCREMENT"
        assert ctx.additional_args == []

    def test_generated_string_id_rejected(self, sqlite: SqliteDialect) -> None:
        with pytest.raises(UnsupportedCapabilityError, match="string"):
            sqlite.column_definition_sql(
                _field(SqlType.STRING, name="id", generated_id=True), DdlContext(table_name="t")
            )
