"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import ExportSettings


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_settings(config_path: Path | str | None) -> ExportSettings:
    """Load and validate export settings; ``None`` yields the defaults."""
    if config_path is None:
        return ExportSettings()

    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return parse_settings(parsed.get("export"))


def parse_settings(value: Any) -> ExportSettings:
    """Validate an ``export`` section mapping into :class:`ExportSettings`."""
    if value is None:
        return ExportSettings()
    section = _require_mapping(value, "export")
    defaults = ExportSettings()

    separator = _require_single_character(
        section.get("separator", defaults.separator), "export.separator"
    )
    max_array_elements = _require_positive_int(
        section.get("max_array_elements", defaults.max_array_elements),
        "export.max_array_elements",
    )
    excel_enabled = _require_bool(
        section.get("excel_enabled", defaults.excel_enabled), "export.excel_enabled"
    )
    result_key = _optional_string(section.get("result_key"), "export.result_key")
    risky_characters = _normalize_character_sequence(
        section.get("risky_characters", defaults.risky_characters), "export.risky_characters"
    )
    neutralizer = _require_non_empty_string(
        section.get("neutralizer", defaults.neutralizer), "export.neutralizer"
    )
    if neutralizer[0] in risky_characters:
        raise ConfigurationError("export.neutralizer must not start with a risky character.")

    return ExportSettings(
        separator=separator,
        max_array_elements=max_array_elements,
        excel_enabled=excel_enabled,
        result_key=result_key,
        risky_characters=risky_characters,
        neutralizer=neutralizer,
    )


def _normalize_character_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if isinstance(value, str):
        return tuple(value)
    if not isinstance(value, Sequence):
        raise ConfigurationError(f"{field_name} must be a string or list of characters.")
    characters: list[str] = []
    for item in value:
        characters.append(_require_single_character(item, field_name))
    return tuple(characters)


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_single_character(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or len(value) != 1:
        raise ConfigurationError(f"{field_name} must be a single character.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    if not value:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return value


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value)
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
