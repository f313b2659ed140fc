"""Unit tests for typed partial updates."""

from racks.domain import (
    AddressPatch,
    AddressType,
    ComponentPatch,
    ComponentType,
    InterfacePatch,
    NetworkAddress,
    NetworkInterface,
    PduConfig,
    Rack,
    RackComponent,
    RackPatch,
    SubComponent,
    SubComponentPatch,
)


def server() -> RackComponent:
    return RackComponent(
        id="srv",
        name="Server",
        height=2,
        position=10,
        type=ComponentType.COMPUTE,
        color="#111111",
        weight=20.0,
        metadata={"deviceName": "srv01", "notes": "rack front"},
        tags=("prod",),
        pdu_config=PduConfig(count=2),
    )


class TestComponentPatch:
    """Tests for ComponentPatch."""

    def test_empty_patch_changes_nothing(self) -> None:
        component = server()
        assert ComponentPatch().apply(component) == component

    def test_unset_fields_retained(self) -> None:
        updated = ComponentPatch(name="Web").apply(server())
        assert updated.name == "Web"
        assert updated.height == 2
        assert updated.color == "#111111"
        assert updated.tags == ("prod",)
        assert updated.pdu_config == PduConfig(count=2)

    def test_metadata_merged_by_key(self) -> None:
        updated = ComponentPatch(metadata={"notes": "moved"}).apply(server())
        assert updated.metadata == {"deviceName": "srv01", "notes": "moved"}

    def test_explicit_none_clears_optional(self) -> None:
        updated = ComponentPatch(color=None, pdu_config=None).apply(server())
        assert updated.color is None
        assert updated.pdu_config is None

    def test_id_preserved(self) -> None:
        assert ComponentPatch(name="X", position=1).apply(server()).id == "srv"

    def test_changes_geometry(self) -> None:
        assert ComponentPatch(position=3).changes_geometry
        assert ComponentPatch(height=3).changes_geometry
        assert not ComponentPatch(name="X", tags=()).changes_geometry

    def test_original_untouched(self) -> None:
        component = server()
        ComponentPatch(metadata={"notes": "changed"}).apply(component)
        assert component.metadata["notes"] == "rack front"


class TestRackPatch:
    """Tests for RackPatch."""

    def test_rename(self) -> None:
        rack = Rack(id="r", name="Old", height=42)
        updated = RackPatch(name="New").apply(rack)
        assert updated.name == "New"
        assert updated.height == 42
        assert not RackPatch(name="New").changes_geometry

    def test_resize(self) -> None:
        rack = Rack(id="r", name="Old", height=42)
        assert RackPatch(height=48).apply(rack).height == 48
        assert RackPatch(height=48).changes_geometry


class TestNestedPatches:
    """Tests for sub-component, interface and address patches."""

    def test_sub_component_patch(self) -> None:
        sub = SubComponent(
            id="s", name="Blade", position="slot-1", metadata={"model": "B200"}
        )
        updated = SubComponentPatch(
            position="slot-2", metadata={"serialNumber": "SN"}
        ).apply(sub)
        assert updated.name == "Blade"
        assert updated.position == "slot-2"
        assert updated.metadata == {"model": "B200", "serialNumber": "SN"}

    def test_interface_patch(self) -> None:
        interface = NetworkInterface(id="n", name="eth0", vlan=10, link_speed="1G")
        updated = InterfacePatch(vlan=None, mac_address="aa:bb").apply(interface)
        assert updated.vlan is None
        assert updated.mac_address == "aa:bb"
        assert updated.link_speed == "1G"

    def test_address_patch(self) -> None:
        address = NetworkAddress(id="a", address="10.0.0.1", subnet="255.0.0.0")
        updated = AddressPatch(type=AddressType.MANAGEMENT).apply(address)
        assert updated.type is AddressType.MANAGEMENT
        assert updated.address == "10.0.0.1"
        assert updated.subnet == "255.0.0.0"
