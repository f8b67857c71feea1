"""Per-request content negotiation."""

from __future__ import annotations

from tabular_export.configuration import ExportSettings

from .export_contracts import CSV_MEDIA_TYPES, XLSX_MEDIA_TYPE, Negotiation, OutputFormat

_SUFFIX_FORMATS: tuple[tuple[str, OutputFormat], ...] = (
    (".csv", OutputFormat.CSV),
    (".xlsx", OutputFormat.XLSX),
)


def negotiate(path: str, accept: str | None, settings: ExportSettings) -> Negotiation | None:
    """Pick the tabular representation for a request, or ``None`` to keep the original.

    A ``.csv``/``.xlsx`` suffix wins over the accept value and is stripped from the
    routed path; the query string is preserved.
    """
    route_path, separator, query = path.partition("?")
    for suffix, output_format in _SUFFIX_FORMATS:
        if route_path.endswith(suffix):
            if output_format is OutputFormat.XLSX and not settings.excel_enabled:
                return None
            stripped = route_path[: -len(suffix)] + separator + query
            return Negotiation(
                output_format=output_format,
                media_type=_media_type(output_format),
                routed_path=stripped,
            )

    if not accept:
        return None
    for media_type in CSV_MEDIA_TYPES:
        if media_type in accept:
            return Negotiation(
                output_format=OutputFormat.CSV, media_type=media_type, routed_path=path
            )
    if settings.excel_enabled and XLSX_MEDIA_TYPE in accept:
        return Negotiation(
            output_format=OutputFormat.XLSX, media_type=XLSX_MEDIA_TYPE, routed_path=path
        )
    return None


def strip_query(path: str) -> str:
    return path.partition("?")[0]


def _media_type(output_format: OutputFormat) -> str:
    if output_format is OutputFormat.XLSX:
        return XLSX_MEDIA_TYPE
    return CSV_MEDIA_TYPES[0]
