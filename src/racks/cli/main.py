"""Typer CLI for rack layout planning."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from racks.application import ComponentDraft, RackPlanner
from racks.cli.commands import export_command, validate_command
from racks.cli.commands.session import (
    check_result,
    fail,
    open_planner,
    resolve_component,
    resolve_rack,
    save_planner,
    write_configuration,
)
from racks.domain import ComponentType, DistanceUnit, distance
from racks.infrastructure import DistanceReportFormatter, RackDiagramFormatter

app = typer.Typer(
    name="racks",
    help="Plan equipment layout in server racks.",
)

# Register standalone commands
app.command(name="validate")(validate_command)
app.command(name="export")(export_command)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug output"),
    ] = False,
) -> None:
    """Plan equipment layout in server racks."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def new(
    config_file: Annotated[Path, typer.Argument(help="Configuration file to create")],
    name: Annotated[str, typer.Option("--name", "-n", help="Name of the first rack")] = "Rack 1",
    height: Annotated[str, typer.Option("--height", "-u", help="Rack height, e.g. 42 or 42U")] = "42",
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite existing file")] = False,
) -> None:
    """Create a configuration file holding one empty rack."""
    if config_file.exists() and not force:
        fail(f"File already exists: {config_file}", "Use --force to overwrite.")

    planner = RackPlanner()
    check_result(planner.add_rack(name, height))
    save_planner(planner, config_file)

    rack = planner.current_rack
    assert rack is not None
    typer.echo(f"Created {config_file} with rack '{rack.label}' (id: {rack.id})")


@app.command(name="add-rack")
def add_rack(
    config_file: Annotated[Path, typer.Argument(help="Path to the JSON configuration file")],
    name: Annotated[str, typer.Option("--name", "-n", help="Rack name")],
    height: Annotated[str, typer.Option("--height", "-u", help="Rack height, e.g. 42 or 42U")] = "42",
) -> None:
    """Add an empty rack to a configuration."""
    planner = open_planner(config_file)
    rack_id = check_result(planner.add_rack(name, height))
    save_planner(planner, config_file)
    typer.echo(f"Added rack '{name.strip()}' (id: {rack_id})")


@app.command()
def add(
    config_file: Annotated[Path, typer.Argument(help="Path to the JSON configuration file")],
    name: Annotated[str, typer.Argument(help="Component name")],
    height: Annotated[int, typer.Option("--height", "-u", help="Height in rack units")] = 1,
    position: Annotated[
        int | None,
        typer.Option("--position", "-p", help="Bottom unit slot (default: topmost free slot)"),
    ] = None,
    rack: Annotated[
        str | None,
        typer.Option("--rack", "-r", help="Rack id or name (default: first rack)"),
    ] = None,
    component_type: Annotated[
        ComponentType,
        typer.Option("--type", "-t", help="Component type"),
    ] = ComponentType.COMPUTE,
    color: Annotated[
        str | None,
        typer.Option("--color", help="Display color (default: type color)"),
    ] = None,
    tags: Annotated[
        list[str] | None,
        typer.Option("--tag", help="Tag to attach; repeat for several"),
    ] = None,
) -> None:
    """Add a component to a rack, auto-placing it when no position is given."""
    planner = open_planner(config_file)
    target = resolve_rack(planner, rack)

    draft = ComponentDraft(
        name=name,
        height=height,
        position=position,
        type=component_type,
        color=color,
        tags=list(tags or []),
    )
    component_id = check_result(planner.add_component(draft, rack_id=target.id))
    save_planner(planner, config_file)

    component = planner.configuration.find_component(component_id or "")
    assert component is not None
    typer.echo(
        f"Added '{component.name}' at {component.occupied_range} in "
        f"'{target.name}' (id: {component.id})"
    )


@app.command()
def move(
    config_file: Annotated[Path, typer.Argument(help="Path to the JSON configuration file")],
    component: Annotated[str, typer.Argument(help="Component id or name")],
    position: Annotated[int, typer.Option("--position", "-p", help="New bottom unit slot")],
    rack: Annotated[
        str | None,
        typer.Option("--rack", "-r", help="Target rack id or name (default: current rack)"),
    ] = None,
) -> None:
    """Move a component within its rack or into another rack."""
    planner = open_planner(config_file)
    item = resolve_component(planner, component)
    source = planner.configuration.rack_of(item.id)
    assert source is not None
    target = resolve_rack(planner, rack) if rack is not None else source

    check_result(planner.move_component(item.id, target.id, position))
    save_planner(planner, config_file)

    moved = planner.configuration.find_component(item.id)
    assert moved is not None
    typer.echo(f"Moved '{moved.name}' to {moved.occupied_range} in '{target.name}'")


@app.command()
def remove(
    config_file: Annotated[Path, typer.Argument(help="Path to the JSON configuration file")],
    component: Annotated[str, typer.Argument(help="Component id or name")],
) -> None:
    """Remove a component from its rack."""
    planner = open_planner(config_file)
    item = resolve_component(planner, component)
    check_result(planner.delete_component(item.id))
    save_planner(planner, config_file)
    typer.echo(f"Removed '{item.name}'")


@app.command()
def show(
    config_file: Annotated[Path, typer.Argument(help="Path to the JSON configuration file")],
    rack: Annotated[
        str | None,
        typer.Option("--rack", "-r", help="Rack id or name (default: all racks)"),
    ] = None,
    width: Annotated[int, typer.Option("--width", "-w", help="Diagram width in characters")] = 32,
) -> None:
    """Show an ASCII diagram of the racks."""
    planner = open_planner(config_file)
    formatter = RackDiagramFormatter(width=width)
    if rack is None:
        typer.echo(formatter.format_all(planner.configuration))
    else:
        typer.echo(formatter.format(resolve_rack(planner, rack)))


@app.command(name="distance")
def distance_command(
    config_file: Annotated[Path, typer.Argument(help="Path to the JSON configuration file")],
    component: Annotated[str, typer.Argument(help="Component id or name")],
    other: Annotated[
        str | None,
        typer.Argument(help="Second component (default: every other component in the rack)"),
    ] = None,
    unit: Annotated[
        DistanceUnit,
        typer.Option("--unit", help="Unit of the result"),
    ] = DistanceUnit.INCHES,
) -> None:
    """Show the distance between two components of the same rack."""
    planner = open_planner(config_file)
    first = resolve_component(planner, component)

    if other is None:
        report = DistanceReportFormatter().format(first, planner.distances(first.id, unit))
        typer.echo(report)
        return

    second = resolve_component(planner, other)
    first_rack = planner.configuration.rack_of(first.id)
    second_rack = planner.configuration.rack_of(second.id)
    if first_rack is None or second_rack is None or first_rack.id != second_rack.id:
        fail(f"'{first.name}' and '{second.name}' are in different racks.")
    result = distance(first, second, unit)
    typer.echo(f"Distance between '{first.name}' and '{second.name}': {result.format()}")


@app.command()
def upgrade(
    config_file: Annotated[Path, typer.Argument(help="Path to the JSON configuration file")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file (default: rewrite in place)"),
    ] = None,
) -> None:
    """Rewrite a configuration file, including legacy files, in the current format."""
    planner = open_planner(config_file)
    destination = output or config_file
    write_configuration(planner.snapshot(), destination)
    typer.echo(
        f"Wrote {len(planner.configuration)} rack(s) in the current format to {destination}"
    )


if __name__ == "__main__":
    app()
