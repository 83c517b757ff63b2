"""SQL dialect plugin system for dialectkit."""

# Import dialects to trigger registration
import dialectkit.dialect.mysql as _mysql  # noqa: F401
import dialectkit.dialect.postgres as _postgres  # noqa: F401
import dialectkit.dialect.sqlite as _sqlite  # noqa: F401
import dialectkit.dialect.sqlserver as _sqlserver  # noqa: F401
from dialectkit.dialect.base import (
    DdlContext,
    Dialect,
    DialectCapabilities,
    UnsupportedCapabilityError,
)
from dialectkit.dialect.registry import DialectRegistry, UnsupportedDialectError

__all__ = [
    "DdlContext",
    "Dialect",
    "DialectCapabilities",
    "DialectRegistry",
    "UnsupportedCapabilityError",
    "UnsupportedDialectError",
]
