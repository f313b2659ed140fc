"""Drag-and-drop state machine for repositioning components.

The gesture works purely in rack units. The UI converts pointer pixels into
an offset measured in units from the top edge of the hovered rack and feeds
the transitions below. The gesture never mutates the configuration it is
given; `drop` returns the new configuration in a `DropOutcome`.

Phases::

    IDLE --start--> DRAGGING --hover--> PREVIEW | BLOCKED
    PREVIEW/BLOCKED --hover--> PREVIEW | BLOCKED
    DRAGGING/PREVIEW/BLOCKED --drop|cancel--> IDLE
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

from ..entities import Rack, RackConfiguration
from .placement import is_valid_placement
from .transfer import move_component

logger = logging.getLogger(__name__)

__all__ = ["DragGesture", "DragPhase", "DropOutcome", "candidate_slot"]


class DragPhase(str, Enum):
    """Phases of a drag gesture."""

    IDLE = "idle"
    DRAGGING = "dragging"  # Component captured, no rack hovered yet
    PREVIEW = "preview"  # Hovering with a valid candidate slot
    BLOCKED = "blocked"  # Hovering, no valid slot at the pointer


@dataclass(frozen=True)
class DropOutcome:
    """Result of dropping a dragged component.

    Attributes:
        configuration: Configuration after the drop; the input configuration
            when nothing was applied.
        applied: True if the component was moved.
        rack_id: Rack the component ended up in, if applied.
        position: New position, if applied.
    """

    configuration: RackConfiguration
    applied: bool = False
    rack_id: str | None = None
    position: int | None = None


def candidate_slot(
    rack_height: int,
    item_height: int,
    offset: float,
    unit_size: float = 1.0,
) -> int:
    """Map a vertical pointer offset to a start slot.

    Args:
        rack_height: Height of the hovered rack in units.
        item_height: Height of the dragged component in units.
        offset: Distance of the pointer below the top edge of the rack.
        unit_size: Size of one unit in the same measure as `offset`.

    Returns:
        Slot clamped to ``[1, rack_height - item_height + 1]``.
    """
    unit = rack_height - math.floor(offset / unit_size)
    return max(1, min(rack_height - item_height + 1, unit))


class DragGesture:
    """Finite state machine for one drag gesture at a time.

    Attributes:
        phase: Current phase.
        component_id: Component being dragged.
        source_rack_id: Rack the component was picked up from.
        hover_rack_id: Rack currently under the pointer.
        candidate_position: Valid slot offered as preview, if any.
    """

    def __init__(self, unit_size: float = 1.0) -> None:
        self.unit_size = unit_size
        self._reset()

    def _reset(self) -> None:
        self.phase = DragPhase.IDLE
        self.component_id: str | None = None
        self.source_rack_id: str | None = None
        self.hover_rack_id: str | None = None
        self.candidate_position: int | None = None

    @property
    def is_active(self) -> bool:
        return self.phase is not DragPhase.IDLE

    def start(self, configuration: RackConfiguration, component_id: str) -> bool:
        """Capture a component and its source rack.

        Returns:
            False if a gesture is already active or the component is unknown.
        """
        if self.is_active:
            return False
        source = configuration.rack_of(component_id)
        if source is None:
            return False
        self.phase = DragPhase.DRAGGING
        self.component_id = component_id
        self.source_rack_id = source.id
        logger.debug(f"Drag started for '{component_id}' from '{source.id}'")
        return True

    def _resolve_slot(
        self, configuration: RackConfiguration, rack: Rack, offset: float
    ) -> int | None:
        component = configuration.find_component(self.component_id or "")
        if component is None:
            return None
        slot = candidate_slot(rack.height, component.height, offset, self.unit_size)
        exclude = component.id if rack.id == self.source_rack_id else None
        if is_valid_placement(rack, slot, component.height, exclude):
            return slot
        return None

    def hover(
        self, configuration: RackConfiguration, rack_id: str, offset: float
    ) -> int | None:
        """Recompute the candidate slot for the pointer over `rack_id`.

        The dragged component is excluded from collision checks only when the
        hovered rack is its source rack.

        Returns:
            The valid candidate slot, or None when no preview is offered.
        """
        if not self.is_active:
            return None
        rack = configuration.find_rack(rack_id)
        self.hover_rack_id = rack_id
        self.candidate_position = (
            self._resolve_slot(configuration, rack, offset) if rack else None
        )
        self.phase = (
            DragPhase.PREVIEW
            if self.candidate_position is not None
            else DragPhase.BLOCKED
        )
        return self.candidate_position

    def drop(
        self,
        configuration: RackConfiguration,
        rack_id: str,
        offset: float | None = None,
    ) -> DropOutcome:
        """Finish the gesture over `rack_id` and apply the move if valid.

        The preview slot is used when it belongs to `rack_id`. Otherwise a
        best-effort slot is recomputed from `offset` and re-validated. When
        neither yields a valid slot the drop is a no-op.
        """
        if not self.is_active:
            return DropOutcome(configuration=configuration)

        component_id = self.component_id
        position = (
            self.candidate_position
            if self.phase is DragPhase.PREVIEW and self.hover_rack_id == rack_id
            else None
        )
        if position is None and offset is not None:
            rack = configuration.find_rack(rack_id)
            if rack is not None:
                position = self._resolve_slot(configuration, rack, offset)
        self._reset()

        if component_id is None or position is None:
            logger.debug(f"Drop on '{rack_id}' ignored: no valid slot")
            return DropOutcome(configuration=configuration)

        updated = move_component(configuration, component_id, rack_id, position)
        if updated is None:
            logger.debug(f"Drop on '{rack_id}' at {position} rejected")
            return DropOutcome(configuration=configuration)
        return DropOutcome(
            configuration=updated, applied=True, rack_id=rack_id, position=position
        )

    def cancel(self) -> None:
        """Abort the gesture. No mutation occurs."""
        if self.is_active:
            logger.debug(f"Drag of '{self.component_id}' cancelled")
        self._reset()
