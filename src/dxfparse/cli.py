"""Command-line interface for parsing DXF files.

This module provides the CLI using Click for parsing DXF files into JSON
and for inspecting their content.
"""

import json
import logging
from pathlib import Path

import click

from .colors import true_color_to_hex
from .config import ConfigurationHandler, ParserConfig
from .errors import DXFParseError
from .io import JsonExporter
from .io.dxf_reader import DXFReader
from .models import Document, LayerRecord
from .protocols import IExporter

log = logging.getLogger(__name__)


def _load_config(config: Path | None) -> ParserConfig:
    if config is None:
        return ParserConfig()
    handler = ConfigurationHandler(config)
    return handler.load_config()


def _load_document(dxf_file: Path, config: ParserConfig) -> Document:
    reader = DXFReader(dxf_file, config)
    reader.load_file()
    return reader.document


def _print_table(title: str, header: str, rows: list[str]) -> None:
    click.echo("\n" + "=" * 60)
    click.echo(title)
    click.echo("=" * 60)
    click.echo(header)
    click.echo("-" * 60)
    for row in rows:
        click.echo(row)
    click.echo("-" * 60)


def _print_statistics(exporter: IExporter, document: Document) -> None:
    statistics = exporter.export_statistics(document)

    rows = [f"{name:<40} {count:>12}" for name, count in statistics["sections"].items()]
    _print_table("DOCUMENT", f"{'Section':<40} {'Count':>12}", rows)

    rows = [f"{name:<40} {count:>12}" for name, count in statistics["entities"].items()]
    _print_table("ENTITIES", f"{'Type':<40} {'Count':>12}", rows)

    rows = [f"{name:<40} {count:>12}" for name, count in statistics["tables"].items()]
    _print_table("TABLES", f"{'Table':<40} {'Records':>12}", rows)

    rows = [f"{name:<40} {count:>12}" for name, count in statistics["blocks"].items()]
    _print_table("BLOCKS", f"{'Block':<40} {'Entities':>12}", rows)

    rows = [f"{name:<40} {count:>12}" for name, count in statistics["anomalies"].items()]
    _print_table("ANOMALIES", f"{'Kind':<40} {'Count':>12}", rows)


def _print_layers(document: Document) -> None:
    table = document.tables.get("LAYER")
    if table is None or not isinstance(table.records, dict):
        return
    rows = []
    for name, layer in table.records.items():
        if not isinstance(layer, LayerRecord):
            continue
        color = true_color_to_hex(layer.true_color) if layer.true_color is not None else "-"
        state = "on" if layer.visible else "off"
        rows.append(f"{name:<30} {color:>9} {state:>5} {str(layer.line_type or '-'):>12}")
    _print_table("LAYERS", f"{'Layer':<30} {'Color':>9} {'State':>5} {'Line type':>12}", rows)


@click.group()
@click.version_option(package_name="dxfparse")
@click.option(
    "--verbose",
    "-v",
    type=bool,
    is_flag=True,
    flag_value=True,
    help="Log parsing details and unhandled groups. (Default False)",
)
def main(verbose: bool) -> None:
    """DXF parser.

    This tool reads DXF drawings and exports their header, symbol tables,
    block definitions and entities as JSON.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


@main.command()
@click.argument(
    "dxf_file",
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output JSON file path",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="JSON configuration file",
)
def parse(dxf_file: Path, output: Path | None, config: Path | None) -> None:
    """Parse a DXF file and export it as JSON.

    Arguments:
        DXF_FILE: Path to the DXF file to parse
    """
    # Set default output path if not provided
    if output is None:
        output = dxf_file.with_suffix(".json")

    try:
        parser_config = _load_config(config)
        document = _load_document(dxf_file, parser_config)

        exporter = JsonExporter(output, include_anomalies=parser_config.include_anomalies)
        exporter.export_document(document)
    except (DXFParseError, OSError, json.JSONDecodeError) as e:
        raise click.ClickException(f"Parsing failed: {e}") from e

    click.echo(f"Exported {len(document.entities)} entities to {output}")
    if document.anomalies:
        click.echo(f"{len(document.anomalies)} anomalies reported, see 'inspect --show-anomalies'")


@main.command()
@click.argument(
    "dxf_file",
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="JSON configuration file",
)
@click.option(
    "--show-anomalies",
    type=bool,
    is_flag=True,
    flag_value=True,
    help="List every reported anomaly. (Default False)",
)
def inspect(dxf_file: Path, config: Path | None, show_anomalies: bool) -> None:
    """Print statistics of a DXF file.

    Arguments:
        DXF_FILE: Path to the DXF file to inspect
    """
    try:
        parser_config = _load_config(config)
        document = _load_document(dxf_file, parser_config)
    except (DXFParseError, OSError, json.JSONDecodeError) as e:
        raise click.ClickException(f"Parsing failed: {e}") from e

    click.echo(f"File: {dxf_file}")
    click.echo(f"Version: {document.version or 'unknown'}")
    _print_statistics(JsonExporter(dxf_file.with_suffix(".json")), document)
    _print_layers(document)

    if not show_anomalies:
        return
    click.echo("\nAnomalies:")
    for anomaly in document.anomalies:
        click.echo(f"[{anomaly.kind.value}] {anomaly.message}")


@main.command()
@click.argument("config_file", type=click.Path(path_type=Path))
def create_config(config_file: Path) -> None:
    """Create a sample configuration file.

    Arguments:
        CONFIG_FILE: Path to the JSON configuration file
    """
    config = ConfigurationHandler.sample_config()
    try:
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2, ensure_ascii=False)

        click.echo(f"Sample configuration created: {config_file}")
        click.echo("Edit this file to match the encoding and size of your DXF files.")

    except OSError as e:
        raise click.ClickException(f"Cannot create configuration file: {e}") from e


if __name__ == "__main__":
    main()
