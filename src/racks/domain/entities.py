"""Domain entities for rack layout.

All entities are immutable. Updates produce new objects, either through
`dataclasses.replace` or through the typed patches in `racks.domain.patches`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterator

from .value_objects import (
    COMPONENT_COLORS,
    MAX_RACK_HEIGHT,
    MIN_RACK_HEIGHT,
    AddressType,
    ComponentType,
    FrontBack,
    MetadataKey,
    Side,
    UnitRange,
)


@dataclass(frozen=True)
class NetworkAddress:
    """An address bound to a network interface."""

    id: str
    address: str = ""
    type: AddressType = AddressType.PRIMARY
    subnet: str | None = None
    hostname: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class NetworkInterface:
    """A NIC on a component or sub-component.

    Attributes:
        id: Identifier, unique within the owning component.
        name: Interface name (e.g. "eth0").
        addresses: Addresses bound to this interface.
        mac_address: Optional hardware address.
        link_speed: Optional free-form link speed (e.g. "10G").
        port_number: Optional switch/patch port reference.
        vlan: Optional VLAN id.
        notes: Optional notes.
    """

    id: str
    name: str
    addresses: tuple[NetworkAddress, ...] = ()
    mac_address: str | None = None
    link_speed: str | None = None
    port_number: str | None = None
    vlan: int | None = None
    notes: str | None = None

    def find_address(self, address_id: str) -> NetworkAddress | None:
        return next((a for a in self.addresses if a.id == address_id), None)


@dataclass(frozen=True)
class PduConfig:
    """Power outlet layout of a component."""

    count: int = 0
    front_back: FrontBack = FrontBack.BACK
    side: Side = Side.CENTER

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError("PDU count cannot be negative")


@dataclass(frozen=True)
class EthernetConfig:
    """Number of ethernet ports on the front and back faces."""

    front_count: int = 0
    back_count: int = 0

    def __post_init__(self) -> None:
        if self.front_count < 0 or self.back_count < 0:
            raise ValueError("Ethernet port counts cannot be negative")


@dataclass(frozen=True)
class SubComponent:
    """A logical subdivision of a component (blade, module, slot).

    Sub-components carry their own metadata but no unit position. The
    `position` field is a display label such as "slot-1" or "left".
    """

    id: str
    name: str
    type: ComponentType = ComponentType.COMPUTE
    position: str = ""
    parent_component_id: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    network_interfaces: tuple[NetworkInterface, ...] = ()
    tags: tuple[str, ...] = ()
    weight: float | None = None
    pdu_config: PduConfig | None = None
    ethernet_config: EthernetConfig | None = None

    def find_interface(self, interface_id: str) -> NetworkInterface | None:
        return next((i for i in self.network_interfaces if i.id == interface_id), None)


@dataclass(frozen=True)
class RackComponent:
    """A piece of equipment occupying a contiguous run of units in a rack.

    Attributes:
        id: Identifier, unique across the whole configuration.
        name: Display name.
        height: Height in rack units (U), at least 1.
        position: Starting unit slot, 1-based from the bottom of the rack.
        type: Category used for default coloring.
        color: Explicit display color; falls back to the type color.
        weight: Optional weight.
        metadata: Freeform string attributes. See `MetadataKey` for the
            well-known keys; unknown keys are preserved.
        network_interfaces: NICs on this component.
        tags: Normalized tags.
        sub_components: Nested sub-items. They do not occupy units.
        pdu_config: Optional PDU outlet layout.
        ethernet_config: Optional ethernet port counts.
    """

    id: str
    name: str
    height: int
    position: int
    type: ComponentType = ComponentType.OTHER
    color: str | None = None
    weight: float | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    network_interfaces: tuple[NetworkInterface, ...] = ()
    tags: tuple[str, ...] = ()
    sub_components: tuple[SubComponent, ...] = ()
    pdu_config: PduConfig | None = None
    ethernet_config: EthernetConfig | None = None

    def __post_init__(self) -> None:
        if self.height < 1:
            raise ValueError("Component height must be at least 1U")
        if self.position < 1:
            raise ValueError("Component position must be at least 1")

    @property
    def occupied_range(self) -> UnitRange:
        """Inclusive unit range `[position, position + height - 1]`."""
        return UnitRange.from_height(self.position, self.height)

    @property
    def top(self) -> int:
        """Highest unit slot occupied by this component."""
        return self.position + self.height - 1

    @property
    def display_color(self) -> str:
        return self.color or COMPONENT_COLORS[self.type]

    @property
    def device_name(self) -> str:
        return self.metadata.get(MetadataKey.DEVICE_NAME.value, "")

    @property
    def notes(self) -> str:
        return self.metadata.get(MetadataKey.NOTES.value, "")

    def find_sub_component(self, sub_component_id: str) -> SubComponent | None:
        return next((s for s in self.sub_components if s.id == sub_component_id), None)

    def find_interface(self, interface_id: str) -> NetworkInterface | None:
        return next((i for i in self.network_interfaces if i.id == interface_id), None)


@dataclass(frozen=True)
class Rack:
    """A rack of fixed unit height holding placed components.

    Component order carries no meaning; placement is by unit position.
    """

    id: str
    name: str
    height: int
    components: tuple[RackComponent, ...] = ()

    def __post_init__(self) -> None:
        if self.height < MIN_RACK_HEIGHT:
            raise ValueError(f"Rack height must be at least {MIN_RACK_HEIGHT}U")

    def find_component(self, component_id: str) -> RackComponent | None:
        return next((c for c in self.components if c.id == component_id), None)

    def contains(self, component_id: str) -> bool:
        return self.find_component(component_id) is not None

    def with_components(self, components: tuple[RackComponent, ...]) -> Rack:
        """Return a copy of this rack holding `components`."""
        return replace(self, components=tuple(components))

    def without_component(self, component_id: str) -> Rack:
        return self.with_components(
            tuple(c for c in self.components if c.id != component_id)
        )

    def replace_component(self, component: RackComponent) -> Rack:
        """Return a copy with the component of the same id swapped for `component`."""
        return self.with_components(
            tuple(component if c.id == component.id else c for c in self.components)
        )

    @property
    def used_units(self) -> int:
        return sum(c.height for c in self.components)

    @property
    def free_units(self) -> int:
        return max(self.height - self.used_units, 0)

    @property
    def label(self) -> str:
        return f"{self.name} ({self.height}U)"


@dataclass(frozen=True)
class RackConfiguration:
    """The set of racks that is imported and exported as a unit."""

    racks: tuple[Rack, ...] = ()

    def __iter__(self) -> Iterator[Rack]:
        return iter(self.racks)

    def __len__(self) -> int:
        return len(self.racks)

    def find_rack(self, rack_id: str) -> Rack | None:
        return next((r for r in self.racks if r.id == rack_id), None)

    def rack_of(self, component_id: str) -> Rack | None:
        """Return the rack whose item set contains `component_id`."""
        return next((r for r in self.racks if r.contains(component_id)), None)

    def find_component(self, component_id: str) -> RackComponent | None:
        rack = self.rack_of(component_id)
        return rack.find_component(component_id) if rack else None

    def replace_rack(self, rack: Rack) -> RackConfiguration:
        return RackConfiguration(
            racks=tuple(rack if r.id == rack.id else r for r in self.racks)
        )

    def add_rack(self, rack: Rack) -> RackConfiguration:
        return RackConfiguration(racks=self.racks + (rack,))

    def remove_rack(self, rack_id: str) -> RackConfiguration:
        return RackConfiguration(racks=tuple(r for r in self.racks if r.id != rack_id))


def is_valid_rack_height(height: int) -> bool:
    """Check a rack height against the limits enforced at creation."""
    return MIN_RACK_HEIGHT <= height <= MAX_RACK_HEIGHT
