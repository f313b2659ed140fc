"""Pydantic schema for rack configuration files.

The persisted format is a JSON array of racks with camelCase keys. Older
encodings are upgraded while validating:

- missing or null ``networkInterfaces``/``tags``/``subComponents`` become
  empty lists
- ``pduConfig.placement`` is split into ``frontBack`` and ``side``
- ``ethernetConfig.placement``/``count`` become ``frontCount``/``backCount``
- a ``metadata.ipAddress`` on an item without interfaces becomes an ``eth0``
  interface holding one primary address

The address upgrade only runs when validating with ``LEGACY_CONTEXT``, so
schemas built from domain objects for export are left as they are.
"""

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from racks.domain.ids import new_id
from racks.domain.value_objects import (
    MAX_RACK_HEIGHT,
    MIN_RACK_HEIGHT,
    AddressType,
    ComponentType,
    FrontBack,
    MetadataKey,
    Side,
)

# Name given to the interface synthesized from a legacy metadata.ipAddress
LEGACY_INTERFACE_NAME = "eth0"
LEGACY_CONTEXT: dict[str, Any] = {"upgrade_legacy": True}

_COLLECTION_KEYS = (
    ("networkInterfaces", "network_interfaces"),
    ("tags", "tags"),
    ("subComponents", "sub_components"),
)


class CamelModel(BaseModel):
    """Base model reading and writing camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _to_optional_str(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return _blank_to_none(value)
    return str(value)


class NetworkAddressSchema(CamelModel):
    """An address bound to a network interface."""

    id: str = Field(default_factory=lambda: new_id("addr"))
    address: str = ""
    type: AddressType = AddressType.PRIMARY
    subnet: str | None = None
    hostname: str | None = None
    notes: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def default_blank_type(cls, value: Any) -> Any:
        return value or AddressType.PRIMARY.value

    @field_validator("subnet", "hostname", "notes", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        return _to_optional_str(value)


class NetworkInterfaceSchema(CamelModel):
    """A NIC and its addresses."""

    id: str = Field(default_factory=lambda: new_id("nic"))
    name: str
    addresses: list[NetworkAddressSchema] = Field(default_factory=list)
    mac_address: str | None = None
    link_speed: str | None = None
    port_number: str | None = None
    vlan: int | None = Field(default=None, ge=0, le=4095)
    notes: str | None = None

    @field_validator("addresses", mode="before")
    @classmethod
    def null_addresses(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("mac_address", "link_speed", "port_number", "notes", mode="before")
    @classmethod
    def optional_text(cls, value: Any) -> Any:
        return _to_optional_str(value)

    @field_validator("vlan", mode="before")
    @classmethod
    def blank_vlan(cls, value: Any) -> Any:
        return _blank_to_none(value)


class PduConfigSchema(CamelModel):
    """PDU outlet layout on the two placement axes."""

    count: int = Field(default=0, ge=0)
    front_back: FrontBack = FrontBack.BACK
    side: Side = Side.CENTER

    @model_validator(mode="before")
    @classmethod
    def split_legacy_placement(cls, data: Any) -> Any:
        """Split a single ``placement`` enum into ``frontBack`` and ``side``."""
        if not isinstance(data, dict) or "placement" not in data:
            return data
        data = dict(data)
        placement = data.pop("placement")
        if "frontBack" in data or "side" in data:
            return data
        if placement in (FrontBack.FRONT.value, FrontBack.BACK.value):
            data["frontBack"] = placement
            data["side"] = Side.CENTER.value
        elif placement in (Side.LEFT.value, Side.RIGHT.value, Side.CENTER.value):
            data["frontBack"] = FrontBack.BACK.value
            data["side"] = placement
        return data


class EthernetConfigSchema(CamelModel):
    """Ethernet port counts per rack face."""

    front_count: int = Field(default=0, ge=0)
    back_count: int = Field(default=0, ge=0)

    @model_validator(mode="before")
    @classmethod
    def split_legacy_count(cls, data: Any) -> Any:
        """Turn ``{placement, count}`` into ``{frontCount, backCount}``.

        A back placement fills ``backCount``; any other placement is
        treated as the front face.
        """
        if not isinstance(data, dict) or "count" not in data:
            return data
        data = dict(data)
        placement = data.pop("placement", None)
        count = data.pop("count") or 0
        if "frontCount" in data or "backCount" in data:
            return data
        if placement == FrontBack.BACK.value:
            data["frontCount"] = 0
            data["backCount"] = count
        else:
            data["frontCount"] = count
            data["backCount"] = 0
        return data


def _upgrade_item(data: Any, info: ValidationInfo) -> Any:
    """Apply the collection and legacy-address upgrades shared by all items."""
    if not isinstance(data, dict):
        return data
    data = dict(data)
    for camel, snake in _COLLECTION_KEYS:
        if data.get(camel) is None and data.get(snake) is None:
            data.pop(snake, None)
            data[camel] = []

    metadata = data.get("metadata")
    if not isinstance(metadata, dict):
        metadata = {}
    interfaces = data.get("networkInterfaces") or data.get("network_interfaces")
    ip_address = metadata.get(MetadataKey.IP_ADDRESS.value)
    upgrading = bool(info.context and info.context.get("upgrade_legacy"))
    if upgrading and ip_address and not interfaces:
        data.pop("network_interfaces", None)
        address: dict[str, Any] = {
            "id": new_id("addr"),
            "address": ip_address,
            "type": AddressType.PRIMARY.value,
        }
        subnet = metadata.get(MetadataKey.SUBNET.value)
        if subnet:
            address["subnet"] = subnet
        data["networkInterfaces"] = [
            {
                "id": new_id("nic"),
                "name": LEGACY_INTERFACE_NAME,
                "addresses": [address],
            }
        ]
    return data


def _coerce_metadata(value: Any) -> Any:
    if value is None:
        return {}
    if not isinstance(value, dict):
        return value
    return {str(k): str(v) for k, v in value.items() if v is not None}


def _coerce_component_type(value: Any) -> Any:
    # Category is display-only; unknown values fall back to "other"
    if isinstance(value, ComponentType):
        return value
    try:
        return ComponentType(value)
    except ValueError:
        return ComponentType.OTHER


class SubComponentSchema(CamelModel):
    """A sub-item of a component. Its position is a display label only."""

    id: str = Field(default_factory=lambda: new_id("subcomp"))
    name: str
    type: ComponentType = ComponentType.COMPUTE
    position: str = ""
    parent_component_id: str | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
    network_interfaces: list[NetworkInterfaceSchema] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    weight: float | None = Field(default=None, ge=0)
    pdu_config: PduConfigSchema | None = None
    ethernet_config: EthernetConfigSchema | None = None

    @model_validator(mode="before")
    @classmethod
    def upgrade_legacy(cls, data: Any, info: ValidationInfo) -> Any:
        return _upgrade_item(data, info)

    @field_validator("metadata", mode="before")
    @classmethod
    def coerce_metadata(cls, value: Any) -> Any:
        return _coerce_metadata(value)

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, value: Any) -> Any:
        return _coerce_component_type(value)

    @field_validator("position", mode="before")
    @classmethod
    def position_label(cls, value: Any) -> Any:
        return "" if value is None else str(value)


class ComponentSchema(CamelModel):
    """A component placed in a rack."""

    id: str
    name: str
    height: int = Field(..., ge=1)
    position: int = Field(..., ge=1)
    type: ComponentType = ComponentType.OTHER
    color: str | None = None
    weight: float | None = Field(default=None, ge=0)
    metadata: dict[str, str] = Field(default_factory=dict)
    network_interfaces: list[NetworkInterfaceSchema] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    sub_components: list[SubComponentSchema] = Field(default_factory=list)
    pdu_config: PduConfigSchema | None = None
    ethernet_config: EthernetConfigSchema | None = None

    @model_validator(mode="before")
    @classmethod
    def upgrade_legacy(cls, data: Any, info: ValidationInfo) -> Any:
        return _upgrade_item(data, info)

    @field_validator("metadata", mode="before")
    @classmethod
    def coerce_metadata(cls, value: Any) -> Any:
        return _coerce_metadata(value)

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, value: Any) -> Any:
        return _coerce_component_type(value)


class RackSchema(CamelModel):
    """A rack and the components placed in it."""

    id: str
    name: str
    height: int = Field(..., ge=MIN_RACK_HEIGHT, le=MAX_RACK_HEIGHT)
    components: list[ComponentSchema]
