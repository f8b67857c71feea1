"""Sink writing exports."""

from .delimited_text_sink import DEFAULT_SEPARATOR, render_delimited_text, stream_delimited_text
from .spreadsheet_sink import DEFAULT_SHEET_TITLE, SinkError, stream_spreadsheet

__all__ = [
    "DEFAULT_SEPARATOR",
    "DEFAULT_SHEET_TITLE",
    "SinkError",
    "render_delimited_text",
    "stream_delimited_text",
    "stream_spreadsheet",
]
