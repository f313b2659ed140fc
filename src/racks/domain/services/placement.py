"""Placement validation for rack components.

A placement is legal when the candidate range lies inside the rack and does
not overlap any other component. Checks are side-effect free and are used
both for manually entered positions and for drag previews.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..entities import Rack, RackComponent
from ..value_objects import UnitRange
from .grid import occupied_range

__all__ = [
    "PlacementCheck",
    "check_placement",
    "find_conflicts",
    "is_valid_placement",
]


@dataclass(frozen=True)
class PlacementCheck:
    """Outcome of a placement check.

    Attributes:
        valid: True if the placement is legal.
        reason: One of "ok", "invalid_height", "out_of_bounds", "overlap".
        conflicts: Components the candidate would overlap.
    """

    valid: bool
    reason: str = "ok"
    conflicts: tuple[RackComponent, ...] = field(default_factory=tuple)

    @property
    def message(self) -> str:
        """Human-readable explanation suitable for an input form."""
        if self.reason == "invalid_height":
            return "Component height must be at least 1U"
        if self.reason == "out_of_bounds":
            return "Component would exceed rack bounds"
        if self.reason == "overlap":
            names = ", ".join(c.name for c in self.conflicts)
            return f"Component would overlap with existing components: {names}"
        return "Placement is valid"


def find_conflicts(
    rack: Rack,
    candidate: UnitRange,
    exclude_item_id: str | None = None,
) -> tuple[RackComponent, ...]:
    """Return the components of `rack` whose ranges overlap `candidate`.

    The component with id `exclude_item_id` is ignored, so an item being
    repositioned never collides with itself.
    """
    return tuple(
        component
        for component in rack.components
        if component.id != exclude_item_id
        and occupied_range(component).overlaps(candidate)
    )


def check_placement(
    rack: Rack,
    candidate_start: int,
    candidate_height: int,
    exclude_item_id: str | None = None,
) -> PlacementCheck:
    """Check a proposed placement and explain why it fails, if it does."""
    if candidate_height < 1:
        return PlacementCheck(valid=False, reason="invalid_height")

    if candidate_start < 1 or candidate_start + candidate_height - 1 > rack.height:
        return PlacementCheck(valid=False, reason="out_of_bounds")

    candidate = UnitRange.from_height(candidate_start, candidate_height)
    conflicts = find_conflicts(rack, candidate, exclude_item_id)
    if conflicts:
        return PlacementCheck(valid=False, reason="overlap", conflicts=conflicts)

    return PlacementCheck(valid=True)


def is_valid_placement(
    rack: Rack,
    candidate_start: int,
    candidate_height: int,
    exclude_item_id: str | None = None,
) -> bool:
    """Decide whether `candidate_height` units starting at `candidate_start` fit.

    Args:
        rack: Rack whose occupancy is checked.
        candidate_start: Proposed bottom slot (1-based).
        candidate_height: Proposed height in units.
        exclude_item_id: Component to ignore, typically the one being moved.

    Returns:
        True if the range is in bounds and overlaps no other component.
    """
    return check_placement(
        rack, candidate_start, candidate_height, exclude_item_id
    ).valid
