"""Response export entities."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from tabular_export.dynamic_overlay import OverlayResolver
from tabular_export.schema_management import SchemaNode

CSV_MEDIA_TYPES: tuple[str, ...] = ("text/csv", "application/csv")
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class OutputFormat(str, Enum):
    """Tabular representation negotiated for a response."""

    CSV = "csv"
    XLSX = "xlsx"


@dataclass(frozen=True)
class RouteDeclaration:
    """Declared response schema and dynamic schema resolvers of one route."""

    path: str
    method: str
    schema: SchemaNode | None = None
    dynamic_schemas: Mapping[str, OverlayResolver] = field(
        default_factory=lambda: MappingProxyType({})
    )


@dataclass(frozen=True)
class ExportRequest:
    """Request facts needed to negotiate and render a tabular response."""

    path: str
    method: str = "GET"
    accept: str | None = None
    context: Any = None


@dataclass(frozen=True)
class Negotiation:
    """Outcome of content negotiation for one request."""

    output_format: OutputFormat
    media_type: str
    routed_path: str


@dataclass(frozen=True)
class TabularResponse:
    """Tabular representation ready to be streamed by the hosting layer."""

    media_type: str
    headers: Mapping[str, str]
    body: Iterator[str] | Iterator[bytes]
    separator: str | None = None
