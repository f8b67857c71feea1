"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click

from tabular_export.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    load_settings,
    write_placeholder_configuration,
)
from tabular_export.response_export import OutputFormat, build_columns, export_dataset
from tabular_export.row_materialization import ScalarPassthrough, prepare_dataset
from tabular_export.schema_management import (
    SchemaError,
    SchemaNode,
    compile_schema,
    load_schema_text,
)
from tabular_export.sink_writing import SinkError


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="tabular-export")
@click.option("--verbose", is_flag=True, default=False, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """Schema-driven CSV/XLSX export utility."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML export configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML export configuration with the default settings."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="columns")
@click.option(
    "--schema",
    "schema_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON response schema",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON export configuration file",
)
def columns(schema_path: str, config_path: str | None) -> None:
    """Print the flattened column headers of a schema, one per line."""
    try:
        settings = load_settings(config_path)
        schema = _read_schema(schema_path)
        sample: Any = {settings.result_key: []} if settings.result_key else []
        prepared = prepare_dataset(schema, sample, result_key=settings.result_key)
        if isinstance(prepared, ScalarPassthrough):
            return
        for column in build_columns(prepared, settings):
            click.echo(column.header)
    except (ConfigurationError, SchemaError, OSError) as exc:
        raise CliError(str(exc)) from exc


@cli.command(name="export")
@click.option(
    "--schema",
    "schema_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON response schema",
)
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON payload to export",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON export configuration file",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([item.value for item in OutputFormat]),
    default=OutputFormat.CSV.value,
    show_default=True,
    help="Tabular output format",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Destination file; CSV is written to stdout when omitted",
)
def export(
    schema_path: str,
    input_path: str,
    config_path: str | None,
    output_format: str,
    output_path: str | None,
) -> None:
    """Flatten a JSON payload against its schema and write CSV or XLSX."""
    selected = OutputFormat(output_format)
    if selected is OutputFormat.XLSX and output_path is None:
        raise CliError("--output is required for xlsx exports.")
    try:
        settings = load_settings(config_path)
        schema = _read_schema(schema_path)
        payload = _read_payload(input_path)
        chunks = export_dataset(schema, payload, settings, output_format=selected)
        _write_chunks(chunks, selected, output_path)
    except (ConfigurationError, SchemaError, SinkError, OSError, ValueError) as exc:
        raise CliError(str(exc)) from exc
    if output_path is not None:
        click.echo(str(Path(output_path).resolve()))


def _read_schema(schema_path: str) -> SchemaNode:
    path = Path(schema_path)
    if not path.exists():
        raise SchemaError(f"Schema file not found: {path}")
    return compile_schema(load_schema_text(path.read_text(encoding="utf-8")))


def _read_payload(input_path: str) -> Any:
    path = Path(input_path)
    if not path.exists():
        raise CliError(f"Input file not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise CliError(f"Invalid JSON payload: {exc}") from exc


def _write_chunks(chunks, output_format: OutputFormat, output_path: str | None) -> None:
    if output_path is None:
        for chunk in chunks:
            click.echo(chunk, nl=False)
        click.echo()
        return
    destination = Path(output_path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    if output_format is OutputFormat.XLSX:
        with destination.open("wb") as handle:
            for chunk in chunks:
                handle.write(chunk)
        return
    with destination.open("w", encoding="utf-8", newline="") as handle:
        for chunk in chunks:
            handle.write(chunk)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
