"""Streaming spreadsheet (xlsx) sink."""

from __future__ import annotations

import tempfile
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from openpyxl import Workbook
from openpyxl.cell import WriteOnlyCell
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

DEFAULT_SHEET_TITLE = "Export"
CHUNK_SIZE = 64 * 1024


class SinkError(Exception):
    """Raised when a sink cannot be used with the current settings."""


def stream_spreadsheet(
    headers: Sequence[str],
    records: Iterable[Mapping[str, Any]],
    *,
    sheet_title: str = DEFAULT_SHEET_TITLE,
    chunk_size: int = CHUNK_SIZE,
) -> Iterator[bytes]:
    """Write a single-sheet workbook and yield it in byte chunks.

    The workbook is write-only, so each appended row is flushed to disk instead of
    being kept in memory. Every record is a header -> value mapping. Strings are
    stored as text cells, never as formulas, and characters the xlsx format cannot
    hold are dropped.
    """
    workbook = Workbook(write_only=True)
    sheet = workbook.create_sheet(title=sheet_title)
    sheet.append([_cell_value(sheet, header) for header in headers])
    for record in records:
        sheet.append([_cell_value(sheet, record.get(header)) for header in headers])

    with tempfile.TemporaryFile() as buffer:
        workbook.save(buffer)
        buffer.seek(0)
        while chunk := buffer.read(chunk_size):
            yield chunk


def _cell_value(sheet, value: Any) -> Any:
    if value is None:
        return ""
    if not isinstance(value, str):
        return value
    cell = WriteOnlyCell(sheet, value=ILLEGAL_CHARACTERS_RE.sub("", value))
    cell.data_type = "s"
    return cell
