"""Leaf value normalisation for tabular cells."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any

DEFAULT_RISKY_CHARACTERS: tuple[str, ...] = ("=", "+", "-", "@")
DEFAULT_NEUTRALIZER = "'"


@dataclass(frozen=True)
class InjectionGuard:
    """Spreadsheet formula-injection protection for string cells."""

    risky_characters: tuple[str, ...] = DEFAULT_RISKY_CHARACTERS
    neutralizer: str = DEFAULT_NEUTRALIZER

    def __post_init__(self) -> None:
        if not self.neutralizer:
            raise ValueError("Injection neutralizer must not be empty.")
        if self.neutralizer[0] in self.risky_characters:
            raise ValueError("Injection neutralizer must not start with a risky character.")

    def protect(self, value: str) -> str:
        while value and value[0] in self.risky_characters:
            value = self.neutralizer + value
        return value


DEFAULT_GUARD = InjectionGuard()


def normalize_cell(
    value: Any, guard: InjectionGuard = DEFAULT_GUARD, *, date_typed: bool = False
) -> Any:
    """Return the cell value for one resolved leaf.

    With ``date_typed`` set, ISO-8601 strings get the same timestamp rendering as
    ``datetime`` values; unparseable strings are kept as-is.
    """
    if value is None:
        return ""
    if date_typed and isinstance(value, str):
        value = parse_timestamp(value) or value
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, date):
        return format_timestamp(datetime(value.year, value.month, value.day))
    if isinstance(value, str):
        return guard.protect(value)
    if isinstance(value, Mapping):
        return guard.protect(
            json.dumps(
                value, ensure_ascii=False, sort_keys=True, separators=(",", ":"), default=str
            )
        )
    if isinstance(value, Sequence) and not isinstance(value, bytes):
        return guard.protect(
            json.dumps(list(value), ensure_ascii=False, separators=(",", ":"), default=str)
        )
    return value


def format_timestamp(value: datetime) -> str:
    """ISO-8601 timestamp truncated to whole seconds without a zone suffix.

    Aware values are converted to UTC first.
    """
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    return value.replace(tzinfo=None, microsecond=0).isoformat()


def parse_timestamp(value: str) -> datetime | None:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def escape_quotes(value: Any) -> Any:
    """Double embedded quotes of a bare string; other scalars pass unchanged."""
    if isinstance(value, str):
        return value.replace('"', '""')
    return value
