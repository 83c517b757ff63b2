"""SELECT rendering with dialect-aware LIMIT/OFFSET placement."""

from __future__ import annotations

from collections.abc import Sequence

from dialectkit.dialect.base import Dialect, UnsupportedCapabilityError


def _check_pagination(dialect: Dialect, limit: int | None, offset: int | None) -> None:
    caps = dialect.capabilities
    if limit is not None and not caps.supports_limit:
        raise UnsupportedCapabilityError(dialect.name, "LIMIT")
    if offset is None:
        return
    if not caps.supports_offset:
        raise UnsupportedCapabilityError(dialect.name, "OFFSET")
    if limit is None and caps.offset_requires_limit:
        raise UnsupportedCapabilityError(dialect.name, "OFFSET without LIMIT")


def render_select(
    dialect: Dialect,
    table: str,
    columns: Sequence[str] | None = None,
    *,
    where: str | None = None,
    order_by: Sequence[tuple[str, bool]] = (),
    limit: int | None = None,
    offset: int | None = None,
) -> str:
    """Render a single-table SELECT.

    ``where`` is raw SQL.  ``order_by`` holds ``(column, descending)`` pairs.
    An offset the dialect cannot express raises ``UnsupportedCapabilityError``
    instead of being dropped.
    """
    _check_pagination(dialect, limit, offset)
    caps = dialect.capabilities

    sql = "SELECT "
    if limit is not None and caps.limit_after_select:
        sql += dialect.limit_sql(limit, offset)
    if columns:
        sql += ", ".join(dialect.quote_identifier(c) for c in columns)
    else:
        sql += "*"
    sql += f" FROM {dialect.quote_identifier(table)}"
    if where:
        sql += f" WHERE {where}"
    if order_by:
        orders = ", ".join(
            f"{dialect.quote_identifier(c)} {'DESC' if desc else 'ASC'}" for c, desc in order_by
        )
        sql += f" ORDER BY {orders}"
    if limit is not None and not caps.limit_after_select:
        sql += " " + dialect.limit_sql(limit, offset)
    if offset is not None:
        sql += ("" if sql.endswith(" ") else " ") + dialect.offset_sql(offset)
    return sql.rstrip()
