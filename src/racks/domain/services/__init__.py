"""Stateless layout services operating on rack snapshots.

This package provides:
- Unit grid helpers (occupied ranges)
- Placement validation and auto-placement
- Component moves and cross-rack transfers
- The drag-and-drop gesture state machine
- Distance calculation between components
"""

from .auto_placement import (
    FALLBACK_POSITION,
    find_free_position,
    next_available_position,
)
from .distance import ComponentDistance, distance, distances_from
from .drag import DragGesture, DragPhase, DropOutcome, candidate_slot
from .grid import occupied_range, slots
from .placement import (
    PlacementCheck,
    check_placement,
    find_conflicts,
    is_valid_placement,
)
from .transfer import move_component

__all__ = [
    # Unit grid
    "occupied_range",
    "slots",
    # Placement
    "PlacementCheck",
    "check_placement",
    "find_conflicts",
    "is_valid_placement",
    # Auto-placement
    "FALLBACK_POSITION",
    "find_free_position",
    "next_available_position",
    # Moves
    "move_component",
    "DragGesture",
    "DragPhase",
    "DropOutcome",
    "candidate_slot",
    # Distance
    "ComponentDistance",
    "distance",
    "distances_from",
]
