"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "export.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Export settings for tabular-export.
# Every key is optional; the values below are the defaults.

export:
  # Single character placed between delimited-text fields.
  separator: ","
  # Number of column groups produced for every array field.
  max_array_elements: 5
  # Allow spreadsheet (xlsx) output.
  excel_enabled: false
  # Envelope field to unwrap before flattening, e.g. "items" for paginated payloads.
  # result_key: "items"
  # Leading characters that get neutralised to prevent formula injection.
  risky_characters: ["=", "+", "-", "@"]
  neutralizer: "'"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML export configuration template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the export configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Export configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
