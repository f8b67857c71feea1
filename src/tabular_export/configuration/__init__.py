"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_settings, parse_settings
from .runtime_settings import ExportSettings

__all__ = [
    "ExportSettings",
    "ConfigurationError",
    "load_settings",
    "parse_settings",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
