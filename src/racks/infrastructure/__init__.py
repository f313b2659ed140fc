"""Infrastructure layer - export adapters, renderers and text formatters."""

from .exporters import (
    Exporter,
    ExportError,
    ExporterRegistry,
    ExportManager,
    JsonExporter,
    SpreadsheetExporter,
    SvgExporter,
)
from .formatters import DistanceReportFormatter, RackDiagramFormatter
from .rack_diagram_renderer import RackDiagramRenderer

__all__ = [
    "DistanceReportFormatter",
    "Exporter",
    "ExportError",
    "ExporterRegistry",
    "ExportManager",
    "JsonExporter",
    "RackDiagramFormatter",
    "RackDiagramRenderer",
    "SpreadsheetExporter",
    "SvgExporter",
]
