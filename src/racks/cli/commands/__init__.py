"""CLI command implementations for the racks application.

This package contains subcommands for the racks CLI, including:
- validate: Validate a configuration file
- export: Export a configuration to json, svg or xlsx
"""

from racks.cli.commands.export import export_command
from racks.cli.commands.validate import validate_command

__all__ = ["export_command", "validate_command"]
