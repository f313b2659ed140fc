"""Conversion between configuration schema models and domain entities."""

from __future__ import annotations

from typing import Any

from racks.application.config.schema import (
    ComponentSchema,
    EthernetConfigSchema,
    NetworkAddressSchema,
    NetworkInterfaceSchema,
    PduConfigSchema,
    RackSchema,
    SubComponentSchema,
)
from racks.domain.entities import (
    EthernetConfig,
    NetworkAddress,
    NetworkInterface,
    PduConfig,
    Rack,
    RackComponent,
    RackConfiguration,
    SubComponent,
)

# -----------------------------------------------------------------------------
# Schema -> domain
# -----------------------------------------------------------------------------


def _address_to_domain(schema: NetworkAddressSchema) -> NetworkAddress:
    return NetworkAddress(
        id=schema.id,
        address=schema.address,
        type=schema.type,
        subnet=schema.subnet,
        hostname=schema.hostname,
        notes=schema.notes,
    )


def _interface_to_domain(schema: NetworkInterfaceSchema) -> NetworkInterface:
    return NetworkInterface(
        id=schema.id,
        name=schema.name,
        addresses=tuple(_address_to_domain(a) for a in schema.addresses),
        mac_address=schema.mac_address,
        link_speed=schema.link_speed,
        port_number=schema.port_number,
        vlan=schema.vlan,
        notes=schema.notes,
    )


def _pdu_to_domain(schema: PduConfigSchema | None) -> PduConfig | None:
    if schema is None:
        return None
    return PduConfig(
        count=schema.count, front_back=schema.front_back, side=schema.side
    )


def _ethernet_to_domain(schema: EthernetConfigSchema | None) -> EthernetConfig | None:
    if schema is None:
        return None
    return EthernetConfig(
        front_count=schema.front_count, back_count=schema.back_count
    )


def _sub_component_to_domain(
    schema: SubComponentSchema, parent_id: str
) -> SubComponent:
    return SubComponent(
        id=schema.id,
        name=schema.name,
        type=schema.type,
        position=schema.position,
        parent_component_id=schema.parent_component_id or parent_id,
        metadata=dict(schema.metadata),
        network_interfaces=tuple(
            _interface_to_domain(i) for i in schema.network_interfaces
        ),
        tags=tuple(schema.tags),
        weight=schema.weight,
        pdu_config=_pdu_to_domain(schema.pdu_config),
        ethernet_config=_ethernet_to_domain(schema.ethernet_config),
    )


def component_to_domain(schema: ComponentSchema) -> RackComponent:
    """Convert a validated component schema to a RackComponent."""
    return RackComponent(
        id=schema.id,
        name=schema.name,
        height=schema.height,
        position=schema.position,
        type=schema.type,
        color=schema.color,
        weight=schema.weight,
        metadata=dict(schema.metadata),
        network_interfaces=tuple(
            _interface_to_domain(i) for i in schema.network_interfaces
        ),
        tags=tuple(schema.tags),
        sub_components=tuple(
            _sub_component_to_domain(s, schema.id) for s in schema.sub_components
        ),
        pdu_config=_pdu_to_domain(schema.pdu_config),
        ethernet_config=_ethernet_to_domain(schema.ethernet_config),
    )


def rack_to_domain(schema: RackSchema) -> Rack:
    """Convert a validated rack schema to a Rack."""
    return Rack(
        id=schema.id,
        name=schema.name,
        height=schema.height,
        components=tuple(component_to_domain(c) for c in schema.components),
    )


def schema_to_configuration(racks: list[RackSchema]) -> RackConfiguration:
    """Convert validated rack schemas to a RackConfiguration."""
    return RackConfiguration(racks=tuple(rack_to_domain(r) for r in racks))


# -----------------------------------------------------------------------------
# Domain -> schema
# -----------------------------------------------------------------------------


def _address_to_schema(address: NetworkAddress) -> NetworkAddressSchema:
    return NetworkAddressSchema(
        id=address.id,
        address=address.address,
        type=address.type,
        subnet=address.subnet,
        hostname=address.hostname,
        notes=address.notes,
    )


def _interface_to_schema(interface: NetworkInterface) -> NetworkInterfaceSchema:
    return NetworkInterfaceSchema(
        id=interface.id,
        name=interface.name,
        addresses=[_address_to_schema(a) for a in interface.addresses],
        mac_address=interface.mac_address,
        link_speed=interface.link_speed,
        port_number=interface.port_number,
        vlan=interface.vlan,
        notes=interface.notes,
    )


def _pdu_to_schema(config: PduConfig | None) -> PduConfigSchema | None:
    if config is None:
        return None
    return PduConfigSchema(
        count=config.count, front_back=config.front_back, side=config.side
    )


def _ethernet_to_schema(config: EthernetConfig | None) -> EthernetConfigSchema | None:
    if config is None:
        return None
    return EthernetConfigSchema(
        front_count=config.front_count, back_count=config.back_count
    )


def _sub_component_to_schema(sub: SubComponent) -> SubComponentSchema:
    return SubComponentSchema(
        id=sub.id,
        name=sub.name,
        type=sub.type,
        position=sub.position,
        parent_component_id=sub.parent_component_id,
        metadata=dict(sub.metadata),
        network_interfaces=[_interface_to_schema(i) for i in sub.network_interfaces],
        tags=list(sub.tags),
        weight=sub.weight,
        pdu_config=_pdu_to_schema(sub.pdu_config),
        ethernet_config=_ethernet_to_schema(sub.ethernet_config),
    )


def component_to_schema(component: RackComponent) -> ComponentSchema:
    """Convert a RackComponent to its persisted schema."""
    return ComponentSchema(
        id=component.id,
        name=component.name,
        height=component.height,
        position=component.position,
        type=component.type,
        color=component.color,
        weight=component.weight,
        metadata=dict(component.metadata),
        network_interfaces=[
            _interface_to_schema(i) for i in component.network_interfaces
        ],
        tags=list(component.tags),
        sub_components=[_sub_component_to_schema(s) for s in component.sub_components],
        pdu_config=_pdu_to_schema(component.pdu_config),
        ethernet_config=_ethernet_to_schema(component.ethernet_config),
    )


def rack_to_schema(rack: Rack) -> RackSchema:
    """Convert a Rack to its persisted schema."""
    return RackSchema(
        id=rack.id,
        name=rack.name,
        height=rack.height,
        components=[component_to_schema(c) for c in rack.components],
    )


def configuration_to_data(configuration: RackConfiguration) -> list[dict[str, Any]]:
    """Serialize a configuration to JSON-compatible data in the persisted format.

    Keys are camelCase and unset optional fields are omitted.
    """
    return [
        rack_to_schema(rack).model_dump(by_alias=True, exclude_none=True, mode="json")
        for rack in configuration.racks
    ]
