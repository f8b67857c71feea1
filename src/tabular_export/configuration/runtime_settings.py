"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass

from tabular_export.row_materialization.cell_normalization import (
    DEFAULT_NEUTRALIZER,
    DEFAULT_RISKY_CHARACTERS,
    InjectionGuard,
)


@dataclass(frozen=True)
class ExportSettings:
    """Process-wide export settings, fixed at startup."""

    separator: str = ","
    max_array_elements: int = 5
    excel_enabled: bool = False
    result_key: str | None = None
    risky_characters: tuple[str, ...] = DEFAULT_RISKY_CHARACTERS
    neutralizer: str = DEFAULT_NEUTRALIZER

    @property
    def guard(self) -> InjectionGuard:
        return InjectionGuard(risky_characters=self.risky_characters, neutralizer=self.neutralizer)
