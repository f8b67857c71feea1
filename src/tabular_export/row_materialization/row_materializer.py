"""Row materialisation service."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from tabular_export.schema_management import (
    DATE_SCALAR_TYPE,
    ColumnDefinition,
    FlattenedSchema,
    PathSegment,
)

from .cell_normalization import DEFAULT_GUARD, InjectionGuard, normalize_cell

_MISSING = object()


def materialize_row(
    flattened: FlattenedSchema,
    record: Any,
    *,
    guard: InjectionGuard = DEFAULT_GUARD,
) -> list[Any]:
    """Return one normalised cell per column, in column order."""
    return [_materialize_cell(column, record, guard) for column in flattened.columns]


def materialize_record(
    flattened: FlattenedSchema,
    record: Any,
    *,
    guard: InjectionGuard = DEFAULT_GUARD,
) -> dict[str, Any]:
    """Return the row as a header -> cell mapping."""
    return dict(zip(flattened.headers, materialize_row(flattened, record, guard=guard)))


def iter_rows(
    flattened: FlattenedSchema,
    records: Iterable[Any],
    *,
    guard: InjectionGuard = DEFAULT_GUARD,
) -> Iterator[list[Any]]:
    """Lazily materialise ``records``; stops as soon as the consumer stops."""
    for record in records:
        yield materialize_row(flattened, record, guard=guard)


def resolve_path(record: Any, path: Sequence[PathSegment]) -> Any:
    """Walk ``path`` from ``record``; ``None`` when any step is missing or null."""
    current = record
    for segment in path:
        if current is None:
            return None
        current = _step(current, segment)
        if current is _MISSING:
            return None
    return current


def _materialize_cell(column: ColumnDefinition, record: Any, guard: InjectionGuard) -> Any:
    return normalize_cell(
        resolve_path(record, column.path),
        guard,
        date_typed=column.scalar_type == DATE_SCALAR_TYPE,
    )


def _step(current: Any, segment: PathSegment) -> Any:
    if isinstance(segment, int):
        if isinstance(current, Sequence) and not isinstance(current, str | bytes):
            return current[segment] if segment < len(current) else _MISSING
        return _MISSING
    if isinstance(current, Mapping):
        return current.get(segment, _MISSING)
    return _MISSING
