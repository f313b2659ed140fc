"""Rack elevation rendering.

This module renders racks as SVG elevation drawings: racks side by side,
unit numbers along the left rail, and each component drawn over the units it
occupies in its display color.
"""

from __future__ import annotations

from html import escape

from racks.domain.entities import Rack, RackComponent, RackConfiguration


def _text_color(fill: str) -> str:
    """Pick black or white text for readable contrast on `fill`."""
    if len(fill) != 7 or not fill.startswith("#"):
        return "#000000"
    try:
        r, g, b = (int(fill[i : i + 2], 16) for i in (1, 3, 5))
    except ValueError:
        return "#000000"
    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return "#FFFFFF" if luminance < 0.5 else "#000000"


class RackDiagramRenderer:
    """Renders rack elevations in SVG format.

    Attributes:
        unit_height: Pixels per rack unit.
        rack_width: Pixel width of the rack interior.
        rail_width: Pixel width of the numbered left rail.
        rack_gap: Horizontal space between racks.
        rack_fill: Background color of empty units.
        rail_color: Color of rails and unit separators.
        text_color: Color for rack titles and unit numbers.
        show_unit_numbers: Whether to number units along the rail.
    """

    def __init__(
        self,
        unit_height: float = 20.0,
        rack_width: float = 240.0,
        rail_width: float = 30.0,
        rack_gap: float = 40.0,
        rack_fill: str = "#282828",
        rail_color: str = "#555555",
        text_color: str = "#333333",
        show_unit_numbers: bool = True,
    ) -> None:
        self.unit_height = unit_height
        self.rack_width = rack_width
        self.rail_width = rail_width
        self.rack_gap = rack_gap
        self.rack_fill = rack_fill
        self.rail_color = rail_color
        self.text_color = text_color
        self.show_unit_numbers = show_unit_numbers

    def render_svg(self, configuration: RackConfiguration) -> str:
        """Render every rack of the configuration side by side."""
        header_height = 30
        margin = 10
        racks = configuration.racks
        column_width = self.rail_width + self.rack_width

        tallest = max((r.height for r in racks), default=0)
        svg_width = (
            margin * 2
            + len(racks) * column_width
            + max(len(racks) - 1, 0) * self.rack_gap
        )
        svg_height = margin * 2 + header_height + tallest * self.unit_height

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            "",
            "  <!-- Background -->",
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white"/>',
        ]

        for index, rack in enumerate(racks):
            x = margin + index * (column_width + self.rack_gap)
            parts.append("")
            parts.append(self._render_rack(rack, x, margin, header_height))

        parts.append("")
        parts.append("</svg>")
        return "\n".join(parts)

    def _render_rack(
        self, rack: Rack, x: float, y: float, header_height: float
    ) -> str:
        """Render one rack with title, rails, unit grid and components."""
        body_y = y + header_height
        body_height = rack.height * self.unit_height
        interior_x = x + self.rail_width

        parts = [
            f"  <!-- Rack: {escape(rack.name)} -->",
            f'  <g class="rack" data-rack-id="{escape(rack.id)}">',
            f'    <text x="{x + (self.rail_width + self.rack_width) / 2}" '
            f'y="{body_y - 10}" text-anchor="middle" '
            f'font-family="Arial, sans-serif" font-size="14" font-weight="bold" '
            f'fill="{self.text_color}">{escape(rack.label)}</text>',
            f'    <rect x="{interior_x}" y="{body_y}" width="{self.rack_width}" '
            f'height="{body_height}" fill="{self.rack_fill}" '
            f'stroke="{self.rail_color}" stroke-width="2"/>',
        ]

        for unit in range(rack.height, 0, -1):
            unit_y = self._unit_top(rack, unit, body_y)
            parts.append(
                f'    <line x1="{interior_x}" y1="{unit_y}" '
                f'x2="{interior_x + self.rack_width}" y2="{unit_y}" '
                f'stroke="#444444" stroke-width="1"/>'
            )
            if self.show_unit_numbers:
                parts.append(
                    f'    <text x="{x + self.rail_width / 2}" '
                    f'y="{unit_y + self.unit_height / 2 + 4}" text-anchor="middle" '
                    f'font-family="Arial, sans-serif" font-size="10" '
                    f'fill="{self.text_color}">{unit}</text>'
                )

        for component in sorted(rack.components, key=lambda c: -c.position):
            parts.append(self._render_component(rack, component, interior_x, body_y))

        parts.append("  </g>")
        return "\n".join(parts)

    def _unit_top(self, rack: Rack, unit: int, body_y: float) -> float:
        # Unit 1 sits at the bottom of the drawing
        return body_y + (rack.height - unit) * self.unit_height

    def _render_component(
        self, rack: Rack, component: RackComponent, x: float, body_y: float
    ) -> str:
        """Render a component as a colored block with name and height label."""
        top_y = self._unit_top(rack, component.top, body_y)
        height = component.height * self.unit_height
        fill = component.display_color
        text_color = _text_color(fill)
        font_size = min(12, self.unit_height * 0.6)

        return "\n".join(
            [
                f'    <g class="component" data-component-id="{escape(component.id)}">',
                f'      <rect x="{x + 2}" y="{top_y + 1}" '
                f'width="{self.rack_width - 4}" height="{height - 2}" '
                f'fill="{escape(fill)}" stroke="#333333" stroke-width="1"/>',
                f'      <text x="{x + 8}" y="{top_y + height / 2 + font_size / 3}" '
                f'font-family="Arial, sans-serif" font-size="{font_size}" '
                f'font-weight="bold" fill="{text_color}">{escape(component.name)}</text>',
                f'      <text x="{x + self.rack_width - 8}" '
                f'y="{top_y + height / 2 + font_size / 3}" text-anchor="end" '
                f'font-family="Arial, sans-serif" font-size="{font_size * 0.8}" '
                f'fill="{text_color}">{component.height}U</text>',
                "    </g>",
            ]
        )
