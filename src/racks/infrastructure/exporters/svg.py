"""SVG exporter for rack elevation drawings.

Wraps RackDiagramRenderer to write a single image of all racks.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from racks.infrastructure.exporters.base import ExporterRegistry
from racks.infrastructure.rack_diagram_renderer import RackDiagramRenderer

if TYPE_CHECKING:
    from racks.domain.entities import RackConfiguration


@ExporterRegistry.register("svg")
class SvgExporter:
    """SVG exporter for rack elevations.

    Attributes:
        format_name: Identifier for this export format.
        file_extension: File extension for SVG files.
    """

    format_name: ClassVar[str] = "svg"
    file_extension: ClassVar[str] = "svg"
    media_type: ClassVar[str] = "image/svg+xml"

    def __init__(
        self,
        unit_height: float = 20.0,
        rack_width: float = 240.0,
        show_unit_numbers: bool = True,
    ) -> None:
        self.renderer = RackDiagramRenderer(
            unit_height=unit_height,
            rack_width=rack_width,
            show_unit_numbers=show_unit_numbers,
        )

    def export(self, configuration: RackConfiguration, path: Path) -> None:
        path.write_text(self.export_string(configuration), encoding="utf-8")

    def export_string(self, configuration: RackConfiguration) -> str:
        return self.renderer.render_svg(configuration)
