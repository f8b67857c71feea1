"""Schema management entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

PathSegment: TypeAlias = str | int

WILDCARD_LABEL = "*"
DATE_SCALAR_TYPE = "date"


@dataclass(frozen=True)
class ScalarNode:
    """Leaf value (string, number, boolean, date-time)."""

    scalar_type: str = "string"
    label: str | None = None
    required: bool = False


@dataclass(frozen=True)
class ObjectNode:
    """Object with ordered named children; ``children=None`` marks a free-form object."""

    children: tuple[tuple[str, SchemaNode], ...] | None = None
    label: str | None = None
    required: bool = False

    @property
    def is_free_form(self) -> bool:
        return self.children is None


@dataclass(frozen=True)
class ArrayNode:
    """Array with a single item schema."""

    item: SchemaNode
    label: str | None = None
    required: bool = False


SchemaNode: TypeAlias = ScalarNode | ObjectNode | ArrayNode


@dataclass(frozen=True)
class ColumnDefinition:
    """One output column: header text plus the access path into a record."""

    header: str
    path: tuple[PathSegment, ...]
    labelled: bool = False
    scalar_type: str = "string"


@dataclass(frozen=True)
class FlatteningContext:
    """Naming context threaded through recursive flattening."""

    key: str | None = None
    base_path: str = ""
    parent_is_array_item: bool = False
    label_override: str | None = None

    def child(self, name: str) -> FlatteningContext:
        return FlatteningContext(key=name, base_path=join_schema_path(self.base_path, name))


@dataclass(frozen=True)
class FlattenedSchema:
    """Ordered column definitions derived from one schema."""

    columns: tuple[ColumnDefinition, ...]

    @property
    def headers(self) -> tuple[str, ...]:
        return tuple(column.header for column in self.columns)

    def __len__(self) -> int:
        return len(self.columns)

    def __iter__(self):
        return iter(self.columns)


def join_schema_path(base_path: str, name: str) -> str:
    """Return the dotted schema path of ``name`` below ``base_path``."""
    return name if not base_path else f"{base_path}.{name}"
