"""Domain layer - rack entities, value objects and layout services."""

from .entities import (
    EthernetConfig,
    NetworkAddress,
    NetworkInterface,
    PduConfig,
    Rack,
    RackComponent,
    RackConfiguration,
    SubComponent,
    is_valid_rack_height,
)
from .patches import (
    UNSET,
    AddressPatch,
    ComponentPatch,
    InterfacePatch,
    RackPatch,
    SubComponentPatch,
)
from .services import (
    ComponentDistance,
    DragGesture,
    DragPhase,
    DropOutcome,
    check_placement,
    distance,
    distances_from,
    find_free_position,
    is_valid_placement,
    move_component,
    next_available_position,
    occupied_range,
)
from .value_objects import (
    COMPONENT_COLORS,
    MAX_RACK_HEIGHT,
    MIN_RACK_HEIGHT,
    AddressType,
    ComponentType,
    Distance,
    DistanceUnit,
    FrontBack,
    MetadataKey,
    Side,
    UnitRange,
)

__all__ = [
    "AddressPatch",
    "AddressType",
    "COMPONENT_COLORS",
    "ComponentDistance",
    "ComponentPatch",
    "ComponentType",
    "Distance",
    "DistanceUnit",
    "DragGesture",
    "DragPhase",
    "DropOutcome",
    "EthernetConfig",
    "FrontBack",
    "InterfacePatch",
    "MAX_RACK_HEIGHT",
    "MIN_RACK_HEIGHT",
    "MetadataKey",
    "NetworkAddress",
    "NetworkInterface",
    "PduConfig",
    "Rack",
    "RackComponent",
    "RackConfiguration",
    "RackPatch",
    "Side",
    "SubComponent",
    "SubComponentPatch",
    "UNSET",
    "UnitRange",
    "check_placement",
    "distance",
    "distances_from",
    "find_free_position",
    "is_valid_placement",
    "is_valid_rack_height",
    "move_component",
    "next_available_position",
    "occupied_range",
]
