"""dialectkit: vendor SQL dialects for DDL fragments and column type conversion."""

__version__ = "0.3.0"
