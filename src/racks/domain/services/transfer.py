"""Repositioning and cross-rack transfer of components.

Both operations are validated against the target rack and return a new
configuration, or None when the move is rejected. The input configuration
is never modified, and a transfer is built in a single step, so no state
with the component in zero or two racks is ever observable.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ..entities import RackConfiguration
from .placement import is_valid_placement

logger = logging.getLogger(__name__)

__all__ = ["move_component"]


def move_component(
    configuration: RackConfiguration,
    component_id: str,
    target_rack_id: str,
    position: int,
) -> RackConfiguration | None:
    """Move a component to `position` in the rack `target_rack_id`.

    A move inside the source rack updates the position in place. A move to
    another rack removes the component from the source item set and inserts
    it into the target with the new position; identifier and every other
    attribute are preserved.

    Returns:
        The updated configuration, or None if the component or target rack
        does not exist or the placement is invalid.
    """
    source = configuration.rack_of(component_id)
    target = configuration.find_rack(target_rack_id)
    if source is None or target is None:
        logger.debug(
            f"Move of '{component_id}' to '{target_rack_id}' rejected: "
            "unknown component or rack"
        )
        return None

    component = source.find_component(component_id)
    assert component is not None

    same_rack = source.id == target.id
    exclude = component_id if same_rack else None
    if not is_valid_placement(target, position, component.height, exclude):
        logger.debug(
            f"Move of '{component.name}' to position {position} in "
            f"'{target.name}' rejected: invalid placement"
        )
        return None

    moved = replace(component, position=position)
    if same_rack:
        logger.debug(f"Repositioned '{component.name}' to {position} in '{target.name}'")
        return configuration.replace_rack(source.replace_component(moved))

    new_source = source.without_component(component_id)
    new_target = target.with_components(target.components + (moved,))
    logger.debug(
        f"Transferred '{component.name}' from '{source.name}' to "
        f"'{target.name}' at position {position}"
    )
    return RackConfiguration(
        racks=tuple(
            new_source if r.id == source.id else new_target if r.id == target.id else r
            for r in configuration.racks
        )
    )
