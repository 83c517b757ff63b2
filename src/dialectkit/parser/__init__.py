"""Schema file parsing."""

from dialectkit.parser.loader import SchemaLoader, SchemaLoadError, SourceMap, YAMLSafetyError

__all__ = ["SchemaLoadError", "SchemaLoader", "SourceMap", "YAMLSafetyError"]
