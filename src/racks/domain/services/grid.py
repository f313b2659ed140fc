"""Unit grid of a rack.

A rack of height H addresses unit slots ``1..H`` counted from the bottom.
Nothing here carries pixel geometry; rendering derives it downstream.
"""

from __future__ import annotations

from ..entities import RackComponent
from ..value_objects import UnitRange

__all__ = ["occupied_range", "slots"]


def occupied_range(item: RackComponent) -> UnitRange:
    """Return the inclusive ``[start, end]`` unit range covered by `item`."""
    return UnitRange.from_height(item.position, item.height)


def slots(rack_height: int) -> range:
    """All addressable unit slots of a rack, bottom to top."""
    return range(1, rack_height + 1)
