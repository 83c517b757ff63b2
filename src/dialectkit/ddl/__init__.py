"""Table DDL rendering on top of the dialect fragments."""

from dialectkit.ddl.builder import CreateTablePlan, build_create_table, build_drop_table

__all__ = ["CreateTablePlan", "build_create_table", "build_drop_table"]
