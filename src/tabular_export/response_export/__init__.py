"""Response export exports."""

from .content_negotiation import negotiate
from .export_contracts import (
    CSV_MEDIA_TYPES,
    XLSX_MEDIA_TYPE,
    ExportRequest,
    Negotiation,
    OutputFormat,
    RouteDeclaration,
    TabularResponse,
)
from .route_registry import RouteRegistry
from .tabular_export_use_case import build_columns, export_dataset, render_tabular_response

__all__ = [
    "CSV_MEDIA_TYPES",
    "XLSX_MEDIA_TYPE",
    "ExportRequest",
    "Negotiation",
    "OutputFormat",
    "RouteDeclaration",
    "RouteRegistry",
    "TabularResponse",
    "build_columns",
    "export_dataset",
    "negotiate",
    "render_tabular_response",
]
