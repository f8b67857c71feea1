"""Tabular export use-case service."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from tabular_export.configuration import ExportSettings
from tabular_export.dynamic_overlay import resolve_overlay
from tabular_export.row_materialization import (
    ScalarPassthrough,
    TabularDataset,
    iter_rows,
    materialize_record,
    prepare_dataset,
)
from tabular_export.schema_management import FlattenedSchema, SchemaNode, flatten_schema
from tabular_export.sink_writing import SinkError, stream_delimited_text, stream_spreadsheet

from .content_negotiation import negotiate, strip_query
from .export_contracts import ExportRequest, OutputFormat, TabularResponse
from .route_registry import RouteRegistry

_LOGGER = logging.getLogger(__name__)


async def render_tabular_response(
    registry: RouteRegistry,
    request: ExportRequest,
    payload: Any,
    settings: ExportSettings,
) -> TabularResponse | None:
    """Render ``payload`` as CSV/XLSX for ``request``, or ``None`` to keep the original.

    Overlay resolution and flattening complete before the body iterator exists, so
    a :class:`SchemaError` or :class:`OverlayResolutionError` never yields partial
    output.
    """
    negotiation = negotiate(request.path, request.accept, settings)
    if negotiation is None:
        return None
    route = registry.lookup(strip_query(negotiation.routed_path), request.method)
    if route is None or route.schema is None:
        _LOGGER.debug("No response schema for %s %s", request.method, negotiation.routed_path)
        return None

    context = request.context if request.context is not None else request
    overlay = await resolve_overlay(route.dynamic_schemas, context)
    body = export_dataset(
        route.schema,
        payload,
        settings,
        output_format=negotiation.output_format,
        overlay=overlay,
    )
    _LOGGER.debug("Negotiated %s for %s", negotiation.media_type, negotiation.routed_path)
    return TabularResponse(
        media_type=negotiation.media_type,
        headers={
            "content-type": f"{negotiation.media_type}; charset=utf-8; header=present;",
            "content-disposition": "attachment;",
        },
        body=body,
        separator=settings.separator if negotiation.output_format is OutputFormat.CSV else None,
    )


def export_dataset(
    schema: SchemaNode,
    payload: Any,
    settings: ExportSettings,
    *,
    output_format: OutputFormat = OutputFormat.CSV,
    overlay: Mapping[str, SchemaNode] | None = None,
) -> Iterator[str] | Iterator[bytes]:
    """Flatten ``payload`` against ``schema`` and return the sink's chunk stream.

    Raises:
      SchemaError: If the schema cannot be flattened.
      SinkError: If spreadsheet output is requested while disabled.
    """
    if output_format is OutputFormat.XLSX and not settings.excel_enabled:
        raise SinkError("Spreadsheet output is disabled (export.excel_enabled).")

    prepared = prepare_dataset(schema, payload, result_key=settings.result_key)
    if isinstance(prepared, ScalarPassthrough):
        return _stream_scalar(prepared, output_format)

    flattened = build_columns(prepared, settings, overlay=overlay)
    if output_format is OutputFormat.XLSX:
        return stream_spreadsheet(
            flattened.headers,
            (
                materialize_record(flattened, record, guard=settings.guard)
                for record in prepared.records
            ),
        )
    return stream_delimited_text(
        flattened.headers,
        iter_rows(flattened, prepared.records, guard=settings.guard),
        separator=settings.separator,
    )


def build_columns(
    dataset: TabularDataset,
    settings: ExportSettings,
    *,
    overlay: Mapping[str, SchemaNode] | None = None,
) -> FlattenedSchema:
    """Flatten the prepared dataset's schema with the configured array width."""
    return flatten_schema(
        dataset.schema,
        overlay=overlay,
        max_array_elements=settings.max_array_elements,
        base_path=dataset.base_path,
    )


def _stream_scalar(
    prepared: ScalarPassthrough, output_format: OutputFormat
) -> Iterator[str] | Iterator[bytes]:
    value = "" if prepared.value is None else prepared.value
    if output_format is OutputFormat.XLSX:
        return stream_spreadsheet(("value",), iter(({"value": value},)))
    return iter((str(value),))
