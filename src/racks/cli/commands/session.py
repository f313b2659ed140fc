"""Helpers shared by commands that edit a configuration file in place.

Each editing command opens the file into a RackPlanner, applies one
mutation and writes the result back in the current JSON format.
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from racks.application import MutationResult, RackPlanner
from racks.application.config import ConfigError, load_config
from racks.cli.commands.validate import display_load_error
from racks.domain import Rack, RackComponent, RackConfiguration
from racks.infrastructure.exporters import JsonExporter


def open_planner(config_file: Path) -> RackPlanner:
    """Load `config_file` into a planner, exiting with code 1 on failure."""
    planner = RackPlanner()
    try:
        planner.load(load_config(config_file))
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)
    return planner


def write_configuration(configuration: RackConfiguration, config_file: Path) -> None:
    JsonExporter().export(configuration, config_file)


def save_planner(planner: RackPlanner, config_file: Path) -> None:
    write_configuration(planner.snapshot(), config_file)


def resolve_rack(planner: RackPlanner, reference: str | None) -> Rack:
    """Find a rack by id or name; None selects the first rack."""
    configuration = planner.configuration
    if reference is None:
        if not configuration.racks:
            fail("Configuration has no racks. Use 'racks add-rack' first.")
        return configuration.racks[0]

    rack = configuration.find_rack(reference)
    if rack is not None:
        return rack
    matches = [r for r in configuration if r.name == reference]
    if len(matches) == 1:
        return matches[0]
    if matches:
        fail(f"Rack name '{reference}' is ambiguous; use the rack id instead.")
    fail(f"Unknown rack: {reference}")


def resolve_component(planner: RackPlanner, reference: str) -> RackComponent:
    """Find a component by id or, if unique, by name."""
    component = planner.configuration.find_component(reference)
    if component is not None:
        return component
    matches = [
        c for rack in planner.configuration for c in rack.components if c.name == reference
    ]
    if len(matches) == 1:
        return matches[0]
    if matches:
        fail(f"Component name '{reference}' is ambiguous; use the component id instead.")
    fail(f"Unknown component: {reference}")


def check_result(result: MutationResult) -> str | None:
    """Exit with code 1 if the mutation was rejected; return the entity id."""
    if not result.ok:
        fail(*(result.errors or ["Operation rejected"]))
    return result.entity_id


def fail(*messages: str) -> NoReturn:
    for message in messages:
        typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)
