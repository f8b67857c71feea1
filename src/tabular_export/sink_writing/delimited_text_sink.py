"""Streaming delimited-text sink."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

DEFAULT_SEPARATOR = ","


def stream_delimited_text(
    headers: Sequence[str],
    rows: Iterable[Sequence[Any]],
    *,
    separator: str = DEFAULT_SEPARATOR,
) -> Iterator[str]:
    """Yield the header line and then one line per row.

    Lines are separated by ``\\n``; the final line carries no terminator. Rows are
    pulled lazily so the dataset is never buffered.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=separator, lineterminator="\n")

    yield _render_line(writer, buffer, headers)
    for row in rows:
        yield "\n" + _render_line(writer, buffer, row)


def render_delimited_text(
    headers: Sequence[str],
    rows: Iterable[Sequence[Any]],
    *,
    separator: str = DEFAULT_SEPARATOR,
) -> str:
    """Join the streamed output into a single string."""
    return "".join(stream_delimited_text(headers, rows, separator=separator))


def _render_line(writer, buffer: io.StringIO, values: Sequence[Any]) -> str:
    fields = [_field_text(value) for value in values]
    # csv quotes a lone empty field; keep blank cells blank.
    if fields == [""]:
        return ""
    buffer.seek(0)
    buffer.truncate()
    writer.writerow(fields)
    return buffer.getvalue()[:-1]


def _field_text(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value
