"""Default slot resolution for newly added components.

New components go to the highest free contiguous run of units, so a rack
fills from the top down.
"""

from __future__ import annotations

import logging

from ..entities import Rack
from .placement import is_valid_placement

logger = logging.getLogger(__name__)

__all__ = ["FALLBACK_POSITION", "find_free_position", "next_available_position"]

# Returned by next_available_position when no run of the requested size is free
FALLBACK_POSITION: int = 1


def find_free_position(rack: Rack, height: int) -> int | None:
    """Return the topmost start slot where `height` units fit, or None.

    Candidates are scanned from ``rack.height - height + 1`` down to 1.
    """
    if height < 1:
        return None
    if not rack.components:
        top_aligned = rack.height - height + 1
        return top_aligned if top_aligned >= 1 else None

    for position in range(rack.height - height + 1, 0, -1):
        if is_valid_placement(rack, position, height):
            return position
    return None


def next_available_position(rack: Rack, height: int) -> int:
    """Return the default slot for a new component of `height` units.

    Never fails: when no free run exists the result degrades to
    `FALLBACK_POSITION`, which the placement validator will reject if the
    caller tries to use it. Callers that need to know whether space exists
    should use `find_free_position`.
    """
    if not rack.components:
        return rack.height - height + 1

    position = find_free_position(rack, height)
    if position is None:
        logger.debug(
            f"No free {height}U run in rack '{rack.name}', "
            f"falling back to position {FALLBACK_POSITION}"
        )
        return FALLBACK_POSITION
    return position
