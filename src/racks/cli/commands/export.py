"""Export command writing a configuration to one or more formats."""

from pathlib import Path
from typing import Annotated

import typer

from racks.cli.commands.session import fail, open_planner
from racks.infrastructure.exporters import ExportError, ExporterRegistry, ExportManager


def parse_formats(formats_str: str) -> list[str]:
    """Parse a comma-separated format list or "all", exiting on unknown formats."""
    available = ExporterRegistry.available_formats()
    if formats_str.strip().lower() == "all":
        return available

    formats = [f.strip().lower() for f in formats_str.split(",") if f.strip()]
    invalid = [f for f in formats if f not in available]
    if invalid:
        typer.echo(f"Unknown formats: {', '.join(invalid)}", err=True)
        typer.echo(f"Available formats: {', '.join(available)}", err=True)
        raise typer.Exit(code=1)
    if not formats:
        fail("No valid formats to export.")
    return formats


def export_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file"),
    ],
    formats: Annotated[
        str,
        typer.Option(
            "--formats",
            "-f",
            help="Comma-separated export formats: json,svg,xlsx (or 'all')",
        ),
    ] = "all",
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Output directory for exported files"),
    ] = Path("."),
    project_name: Annotated[
        str | None,
        typer.Option(
            "--project-name",
            help="Base name for exported files (default: configuration file name)",
        ),
    ] = None,
) -> None:
    """Export a rack configuration as JSON, an SVG drawing or an xlsx inventory.

    Example:
        racks export lab.json --formats svg,xlsx --output-dir out/
    """
    selected = parse_formats(formats)
    planner = open_planner(config_file)

    manager = ExportManager(output_dir)
    try:
        files = manager.export_all(
            selected, planner.snapshot(), project_name or config_file.stem
        )
    except ExportError as e:
        fail(str(e))

    typer.echo("Exported files:")
    for fmt, path in files.items():
        typer.echo(f"  {fmt.upper()}: {path}")
