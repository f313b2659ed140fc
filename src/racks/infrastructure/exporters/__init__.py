"""Exporter framework for rack configurations.

This package provides a unified exporter framework with:
- Exporter Protocol: Defines the interface for all exporters
- ExporterRegistry: Central registry for format discovery
- ExportManager: Coordinates multi-format export operations

Registered exporters:
- json: The persisted configuration format (array of racks)
- svg: Rack elevation drawing of all racks side by side
- xlsx: Inventory workbook with one sheet per rack

Usage:
    from racks.infrastructure.exporters import ExportManager, ExporterRegistry

    formats = ExporterRegistry.available_formats()

    manager = ExportManager(output_dir=Path("./output"))
    results = manager.export_all(["json", "svg", "xlsx"], configuration, project_name="lab")
"""

from racks.infrastructure.exporters.base import (
    Exporter,
    ExportError,
    ExporterRegistry,
    ExportManager,
)

# Import exporters to trigger registration
from racks.infrastructure.exporters.json_exporter import JsonExporter
from racks.infrastructure.exporters.spreadsheet import SpreadsheetExporter
from racks.infrastructure.exporters.svg import SvgExporter

__all__ = [
    # Framework
    "Exporter",
    "ExportError",
    "ExporterRegistry",
    "ExportManager",
    # Registered exporters
    "JsonExporter",
    "SpreadsheetExporter",
    "SvgExporter",
]
