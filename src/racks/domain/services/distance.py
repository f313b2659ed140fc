"""Spacing between placed components.

Rack units form a continuous vertical axis on which slot ``p`` spans
``[p, p + 1)``, so a component of height ``h`` at ``p`` spans ``[p, p + h)``.
Two 1U components are measured center to center. When either component is
taller, the result is the range between the nearest-edge gap and the
farthest-edge span, collapsed to a single value when both agree.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..entities import Rack, RackComponent
from ..value_objects import Distance, DistanceUnit
from .grid import occupied_range

__all__ = ["ComponentDistance", "distance", "distances_from"]


def _span(item: RackComponent) -> tuple[float, float]:
    unit_range = occupied_range(item)
    return float(unit_range.start), float(unit_range.end + 1)


def distance(
    item_a: RackComponent,
    item_b: RackComponent,
    unit: DistanceUnit = DistanceUnit.RACK_UNITS,
) -> Distance:
    """Compute the distance between two components in `unit`.

    Args:
        item_a: First component.
        item_b: Second component.
        unit: Unit of the result; conversion happens after the unit-based
            distance is computed.

    Returns:
        A Distance whose minimum and maximum are equal for point items.
    """
    if item_a.height == 1 and item_b.height == 1:
        center_a = item_a.position + 0.5
        center_b = item_b.position + 0.5
        value = abs(center_a - center_b) * unit.factor
        return Distance(minimum=value, maximum=value, unit=unit)

    bottom_a, top_a = _span(item_a)
    bottom_b, top_b = _span(item_b)

    if occupied_range(item_a).overlaps(occupied_range(item_b)):
        min_gap = 0.0
    elif top_a <= bottom_b:
        min_gap = bottom_b - top_a
    else:
        min_gap = bottom_a - top_b
    max_gap = max(top_a, top_b) - min(bottom_a, bottom_b)

    return Distance(
        minimum=min_gap * unit.factor,
        maximum=max_gap * unit.factor,
        unit=unit,
    )


@dataclass(frozen=True)
class ComponentDistance:
    """Distance from a reference component to another component."""

    component: RackComponent
    distance: Distance


def distances_from(
    rack: Rack,
    component_id: str,
    unit: DistanceUnit = DistanceUnit.INCHES,
) -> list[ComponentDistance]:
    """List distances from one component to every other component in its rack.

    Results are ordered top to bottom. Returns an empty list if the
    component is not in `rack`.
    """
    reference = rack.find_component(component_id)
    if reference is None:
        return []
    others = sorted(
        (c for c in rack.components if c.id != component_id),
        key=lambda c: c.position,
        reverse=True,
    )
    return [
        ComponentDistance(component=other, distance=distance(reference, other, unit))
        for other in others
    ]
