"""YAML schema loader with position tracking for rich error reporting."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.error import YAMLError

from dialectkit.models.errors import SchemaError, SourceSpan
from dialectkit.models.field import TableSchema

# ---------------------------------------------------------------------------
# Safety limits
# ---------------------------------------------------------------------------

_MAX_DOCUMENT_SIZE = 1_000_000  # 1M characters
_MAX_NODE_COUNT = 10_000
_MAX_DEPTH = 20

# Anchor definitions (&name) at line start or after whitespace/indicators.
_ANCHOR_RE = re.compile(r"(?:^|[\s\-:])&(\w+)", re.MULTILINE)


class YAMLSafetyError(Exception):
    """Raised when YAML input violates safety constraints.

    Distinct from parse errors: these reject oversized, deeply nested or
    anchor-laden documents before they are turned into schemas.
    """


class SchemaLoadError(Exception):
    """Raised when a schema document is malformed or fails validation."""

    def __init__(self, errors: list[SchemaError]) -> None:
        self.errors = errors
        summary = "; ".join(e.message for e in errors[:3])
        super().__init__(f"Schema has {len(errors)} error(s): {summary}")


@dataclass
class SourceMap:
    """Maps YAML key paths to their source positions for error reporting."""

    _positions: dict[str, SourceSpan] = field(default_factory=dict)

    def add(self, path: str, span: SourceSpan) -> None:
        self._positions[path] = span

    def get(self, path: str) -> SourceSpan | None:
        return self._positions.get(path)

    @property
    def paths(self) -> list[str]:
        return list(self._positions.keys())


def _loc_to_path(loc: tuple[int | str, ...]) -> str:
    """Turn a pydantic error location into the SourceMap path syntax."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else part
    return path


class SchemaLoader:
    """Loads ``tables:`` documents into ``TableSchema`` objects.

    Uses ruamel.yaml which preserves line/column info on every parsed node,
    so validation errors can point back into the file.
    """

    def __init__(self) -> None:
        self._yaml = YAML()
        self._yaml.max_depth = _MAX_DEPTH

    # -- safety checks -------------------------------------------------------

    @staticmethod
    def _check_yaml_safety(content: str) -> None:
        if len(content) > _MAX_DOCUMENT_SIZE:
            raise YAMLSafetyError(
                f"YAML document exceeds maximum size "
                f"({len(content):,} chars > {_MAX_DOCUMENT_SIZE:,} limit)"
            )
        if _ANCHOR_RE.search(content):
            raise YAMLSafetyError("YAML anchors/aliases are not supported in schema files")

    @staticmethod
    def _check_node_count(data: Any, limit: int = _MAX_NODE_COUNT) -> None:
        count = 0
        stack: list[Any] = [data]
        while stack:
            node = stack.pop()
            count += 1
            if count > limit:
                raise YAMLSafetyError(f"YAML document exceeds maximum node count ({limit:,})")
            if isinstance(node, dict):
                stack.extend(node.values())
            elif isinstance(node, list):
                stack.extend(node)

    # -- public loading API --------------------------------------------------

    def load(self, path: Path) -> list[TableSchema]:
        """Load a schema file."""
        with path.open("r", encoding="utf-8") as handle:
            content = handle.read()
        return self.load_string(content, filename=str(path))

    def load_string(self, content: str, filename: str = "<string>") -> list[TableSchema]:
        """Load a schema document from a string."""
        self._check_yaml_safety(content)
        try:
            data = self._yaml.load(content)
        except YAMLError as exc:
            raise SchemaLoadError(
                [SchemaError(code="YAML_PARSE_ERROR", message=str(exc))]
            ) from exc
        if data is None:
            return []
        self._check_node_count(data)
        source_map = SourceMap()
        self._extract_positions(data, filename, "", source_map)
        return self._build_tables(self._to_plain(data), source_map)

    def _build_tables(self, raw: Any, source_map: SourceMap) -> list[TableSchema]:
        if not isinstance(raw, dict) or not isinstance(raw.get("tables"), list):
            raise SchemaLoadError(
                [
                    SchemaError(
                        code="MISSING_TABLES",
                        message="Schema document must contain a 'tables' list",
                        path="tables",
                    )
                ]
            )

        tables: list[TableSchema] = []
        errors: list[SchemaError] = []
        for i, entry in enumerate(raw["tables"]):
            prefix = f"tables[{i}]"
            try:
                tables.append(TableSchema.model_validate(entry))
            except ValidationError as exc:
                for err in exc.errors():
                    path = _loc_to_path((prefix, *err["loc"]))
                    errors.append(
                        SchemaError(
                            code="INVALID_TABLE",
                            message=f"{path}: {err['msg']}",
                            path=path,
                            span=self._nearest_span(path, source_map),
                        )
                    )
        if errors:
            raise SchemaLoadError(errors)
        return tables

    @staticmethod
    def _nearest_span(path: str, source_map: SourceMap) -> SourceSpan | None:
        """Position of ``path`` or of its closest recorded ancestor."""
        while path:
            span = source_map.get(path)
            if span is not None:
                return span
            cut = max(path.rfind("."), path.rfind("["))
            if cut <= 0:
                return None
            path = path[:cut]
        return None

    def _extract_positions(
        self,
        data: Any,
        filename: str,
        prefix: str,
        source_map: SourceMap,
    ) -> None:
        """Recursively extract source positions from ruamel.yaml nodes."""
        if isinstance(data, CommentedMap):
            for key in data:
                key_path = f"{prefix}.{key}" if prefix else str(key)
                try:
                    key_positions = data.lc.key(key)
                    if key_positions:
                        line, col = key_positions
                        source_map.add(
                            key_path,
                            SourceSpan(file=filename, line=line + 1, column=col + 1),
                        )
                except (AttributeError, KeyError, TypeError):
                    pass
                self._extract_positions(data[key], filename, key_path, source_map)
        elif isinstance(data, CommentedSeq):
            for i, item in enumerate(data):
                item_path = f"{prefix}[{i}]"
                try:
                    item_pos = data.lc.item(i)
                    if item_pos:
                        line, col = item_pos
                        source_map.add(
                            item_path,
                            SourceSpan(file=filename, line=line + 1, column=col + 1),
                        )
                except (AttributeError, KeyError, TypeError):
                    pass
                self._extract_positions(item, filename, item_path, source_map)

    def _to_plain(self, data: Any) -> Any:
        """Convert ruamel.yaml CommentedMap/Seq to plain Python dict/list."""
        if isinstance(data, dict):
            return {str(k): self._to_plain(v) for k, v in data.items()}
        if isinstance(data, list):
            return [self._to_plain(item) for item in data]
        return data
