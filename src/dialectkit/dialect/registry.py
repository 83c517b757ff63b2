"""Dialect plugin registry: register dialects and resolve them by name or URL."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from dialectkit.dialect.base import Dialect

logger = logging.getLogger("dialectkit.dialect")


class UnsupportedDialectError(Exception):
    """Raised when a requested dialect is not registered."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.dialect_name = name
        self.available = available
        super().__init__(f"Unsupported dialect '{name}'. Available: {', '.join(available)}")


def url_scheme(url: str) -> str:
    """Extract the dialect part of a connection URL.

    ``sqlserver://host/db`` and ``postgres+psycopg://...`` give ``sqlserver``
    and ``postgres``; a bare name is returned unchanged.
    """
    scheme = url.partition(":")[0]
    return scheme.partition("+")[0]


class DialectRegistry:
    """Registry for SQL dialect plugins.

    Each dialect class is instantiated once at registration; the instance is
    immutable and shared by every caller.
    """

    _dialects: dict[str, Dialect] = {}

    @classmethod
    def register(cls, dialect_class: type[Dialect]) -> type[Dialect]:
        """Register a dialect class. Can be used as a decorator."""
        instance = dialect_class()
        cls._dialects[instance.name] = instance
        logger.debug("Registered dialect %s (%s)", instance.name, dialect_class.__name__)
        return dialect_class

    @classmethod
    def get(cls, name: str) -> Dialect:
        """Get the shared instance of the named dialect."""
        if name not in cls._dialects:
            raise UnsupportedDialectError(name, available=cls.available())
        return cls._dialects[name]

    @classmethod
    def resolve(cls, scheme: str) -> Dialect:
        """Find the dialect whose URL identifier equals ``scheme``.

        Dialects are checked in registration order; the first match wins.
        """
        for dialect in cls._dialects.values():
            if dialect.matches_url_scheme(scheme):
                logger.debug("Resolved URL scheme %r to dialect %s", scheme, dialect.name)
                return dialect
        raise UnsupportedDialectError(scheme, available=cls.available())

    @classmethod
    def for_url(cls, url: str) -> Dialect:
        """Resolve the dialect for a full connection URL."""
        return cls.resolve(url_scheme(url))

    @classmethod
    def available(cls) -> list[str]:
        """List registered dialect names."""
        return sorted(cls._dialects.keys())

    @classmethod
    def dialects(cls) -> Mapping[str, Dialect]:
        """Read-only view of the registered dialects, keyed by name."""
        return MappingProxyType(cls._dialects)

    @classmethod
    def reset(cls) -> None:
        """Clear all registered dialects.

        Test-only: dialects register themselves once at import, so nothing
        re-registers them after a reset in a running process.
        """
        cls._dialects.clear()
