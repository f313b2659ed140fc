"""Typed partial updates for rack entities.

Each patch names exactly the fields that may change. Fields left at `UNSET`
keep the current value of the target, so applying a patch never drops data.
Identifiers are not patchable.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Final, TypeVar, Union

from .entities import (
    EthernetConfig,
    NetworkAddress,
    NetworkInterface,
    PduConfig,
    Rack,
    RackComponent,
    SubComponent,
)
from .value_objects import AddressType, ComponentType


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = _Unset.UNSET

T = TypeVar("T")
Maybe = Union[T, _Unset]


def _pick(value: Maybe[T], current: T) -> T:
    return current if value is UNSET else value  # type: ignore[return-value]


@dataclass(frozen=True)
class RackPatch:
    """Partial update of a rack's own fields."""

    name: Maybe[str] = UNSET
    height: Maybe[int] = UNSET

    def apply(self, rack: Rack) -> Rack:
        return replace(
            rack,
            name=_pick(self.name, rack.name),
            height=_pick(self.height, rack.height),
        )

    @property
    def changes_geometry(self) -> bool:
        return self.height is not UNSET


@dataclass(frozen=True)
class ComponentPatch:
    """Partial update of a placed component.

    `metadata` is merged key by key into the existing mapping; every other
    field replaces the current value when set.
    """

    name: Maybe[str] = UNSET
    height: Maybe[int] = UNSET
    position: Maybe[int] = UNSET
    type: Maybe[ComponentType] = UNSET
    color: Maybe[str | None] = UNSET
    weight: Maybe[float | None] = UNSET
    metadata: Maybe[dict[str, str]] = UNSET
    network_interfaces: Maybe[tuple[NetworkInterface, ...]] = UNSET
    tags: Maybe[tuple[str, ...]] = UNSET
    sub_components: Maybe[tuple[SubComponent, ...]] = UNSET
    pdu_config: Maybe[PduConfig | None] = UNSET
    ethernet_config: Maybe[EthernetConfig | None] = UNSET

    def apply(self, component: RackComponent) -> RackComponent:
        metadata = component.metadata
        if self.metadata is not UNSET:
            metadata = {**component.metadata, **self.metadata}
        return replace(
            component,
            name=_pick(self.name, component.name),
            height=_pick(self.height, component.height),
            position=_pick(self.position, component.position),
            type=_pick(self.type, component.type),
            color=_pick(self.color, component.color),
            weight=_pick(self.weight, component.weight),
            metadata=metadata,
            network_interfaces=_pick(
                self.network_interfaces, component.network_interfaces
            ),
            tags=_pick(self.tags, component.tags),
            sub_components=_pick(self.sub_components, component.sub_components),
            pdu_config=_pick(self.pdu_config, component.pdu_config),
            ethernet_config=_pick(self.ethernet_config, component.ethernet_config),
        )

    @property
    def changes_geometry(self) -> bool:
        """True when the patch moves or resizes the component."""
        return self.height is not UNSET or self.position is not UNSET


@dataclass(frozen=True)
class SubComponentPatch:
    """Partial update of a sub-component. Metadata is merged key by key."""

    name: Maybe[str] = UNSET
    type: Maybe[ComponentType] = UNSET
    position: Maybe[str] = UNSET
    metadata: Maybe[dict[str, str]] = UNSET
    network_interfaces: Maybe[tuple[NetworkInterface, ...]] = UNSET
    tags: Maybe[tuple[str, ...]] = UNSET
    weight: Maybe[float | None] = UNSET
    pdu_config: Maybe[PduConfig | None] = UNSET
    ethernet_config: Maybe[EthernetConfig | None] = UNSET

    def apply(self, sub_component: SubComponent) -> SubComponent:
        metadata = sub_component.metadata
        if self.metadata is not UNSET:
            metadata = {**sub_component.metadata, **self.metadata}
        return replace(
            sub_component,
            name=_pick(self.name, sub_component.name),
            type=_pick(self.type, sub_component.type),
            position=_pick(self.position, sub_component.position),
            metadata=metadata,
            network_interfaces=_pick(
                self.network_interfaces, sub_component.network_interfaces
            ),
            tags=_pick(self.tags, sub_component.tags),
            weight=_pick(self.weight, sub_component.weight),
            pdu_config=_pick(self.pdu_config, sub_component.pdu_config),
            ethernet_config=_pick(
                self.ethernet_config, sub_component.ethernet_config
            ),
        )


@dataclass(frozen=True)
class InterfacePatch:
    """Partial update of a network interface."""

    name: Maybe[str] = UNSET
    addresses: Maybe[tuple[NetworkAddress, ...]] = UNSET
    mac_address: Maybe[str | None] = UNSET
    link_speed: Maybe[str | None] = UNSET
    port_number: Maybe[str | None] = UNSET
    vlan: Maybe[int | None] = UNSET
    notes: Maybe[str | None] = UNSET

    def apply(self, interface: NetworkInterface) -> NetworkInterface:
        return replace(
            interface,
            name=_pick(self.name, interface.name),
            addresses=_pick(self.addresses, interface.addresses),
            mac_address=_pick(self.mac_address, interface.mac_address),
            link_speed=_pick(self.link_speed, interface.link_speed),
            port_number=_pick(self.port_number, interface.port_number),
            vlan=_pick(self.vlan, interface.vlan),
            notes=_pick(self.notes, interface.notes),
        )


@dataclass(frozen=True)
class AddressPatch:
    """Partial update of a network address."""

    address: Maybe[str] = UNSET
    type: Maybe[AddressType] = UNSET
    subnet: Maybe[str | None] = UNSET
    hostname: Maybe[str | None] = UNSET
    notes: Maybe[str | None] = UNSET

    def apply(self, address: NetworkAddress) -> NetworkAddress:
        return replace(
            address,
            address=_pick(self.address, address.address),
            type=_pick(self.type, address.type),
            subnet=_pick(self.subnet, address.subnet),
            hostname=_pick(self.hostname, address.hostname),
            notes=_pick(self.notes, address.notes),
        )
