"""Query fragments that depend on dialect capabilities."""

from dialectkit.query.select import render_select

__all__ = ["render_select"]
