"""Text formatters for CLI output."""

from __future__ import annotations

from racks.domain.entities import Rack, RackComponent, RackConfiguration
from racks.domain.services import ComponentDistance


class RackDiagramFormatter:
    """Formats ASCII elevation diagrams of racks.

    Units are listed top to bottom. A component is drawn as a bracketed
    block spanning its units, labelled on its topmost unit.
    """

    def __init__(self, width: int = 32) -> None:
        self.width = max(width, 8)

    def format(self, rack: Rack | None) -> str:
        """Generate an ASCII diagram of one rack."""
        if rack is None:
            return "No rack to display."

        number_width = len(str(rack.height))
        border = " " * (number_width + 1) + "+" + "-" * (self.width + 2) + "+"
        lines = [
            f"RACK: {rack.label}",
            "=" * len(border),
            border,
        ]

        by_unit: dict[int, RackComponent] = {}
        for component in rack.components:
            for unit in range(component.position, component.top + 1):
                by_unit[unit] = component

        for unit in range(rack.height, 0, -1):
            component = by_unit.get(unit)
            if component is None:
                cell = " " * self.width
            elif unit == component.top:
                cell = self._block(f"{component.name} ({component.height}U)")
            else:
                cell = self._block("")
            lines.append(f"{unit:>{number_width}} | {cell} |")

        lines.append(border)
        lines.append("")
        lines.append(
            f"Used: {rack.used_units}U of {rack.height}U ({rack.free_units}U free)"
        )
        lines.append(f"Components: {len(rack.components)}")
        return "\n".join(lines)

    def format_all(self, configuration: RackConfiguration) -> str:
        """Diagrams of every rack, separated by blank lines."""
        if not configuration.racks:
            return "No racks in configuration."
        return "\n\n".join(self.format(rack) for rack in configuration)

    def _block(self, label: str) -> str:
        inner = self.width - 2
        if len(label) > inner:
            label = label[: inner - 1] + "~"
        return f"[{label:<{inner}}]"


class DistanceReportFormatter:
    """Formats the distances from one component to its rack neighbours."""

    def format(self, component: RackComponent, distances: list[ComponentDistance]) -> str:
        lines = [f"Distances from '{component.name}' {component.occupied_range}:"]
        if not distances:
            lines.append("  (no other components in this rack)")
            return "\n".join(lines)

        name_width = max(len(d.component.name) for d in distances)
        for entry in distances:
            lines.append(
                f"  {entry.component.name:<{name_width}}  "
                f"{str(entry.component.occupied_range):<10}  {entry.distance.format()}"
            )
        return "\n".join(lines)
