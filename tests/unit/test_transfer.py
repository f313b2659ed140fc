"""Unit tests for repositioning and cross-rack transfer."""

from dataclasses import replace

from racks.domain import (
    ComponentType,
    Rack,
    RackComponent,
    RackConfiguration,
    move_component,
)


class TestMoveWithinRack:
    """Tests for moves inside the source rack."""

    def test_reposition(self, two_racks: RackConfiguration) -> None:
        updated = move_component(two_racks, "server-1", "rack-a", 20)
        assert updated is not None
        assert updated.find_component("server-1").position == 20

    def test_overlapping_own_old_slot_allowed(self, two_racks: RackConfiguration) -> None:
        """Shifting a 2U item up by one unit overlaps only itself."""
        updated = move_component(two_racks, "server-1", "rack-a", 4)
        assert updated is not None
        assert updated.find_component("server-1").occupied_range.start == 4

    def test_overlap_with_other_rejected(self, two_racks: RackConfiguration) -> None:
        assert move_component(two_racks, "server-1", "rack-a", 9) is None

    def test_out_of_bounds_rejected(self, two_racks: RackConfiguration) -> None:
        assert move_component(two_racks, "server-1", "rack-a", 42) is None

    def test_input_not_modified(self, two_racks: RackConfiguration) -> None:
        move_component(two_racks, "server-1", "rack-a", 20)
        assert two_racks.find_component("server-1").position == 3


class TestTransferBetweenRacks:
    """Tests for cross-rack transfers."""

    def test_transfer_moves_component(self, two_racks: RackConfiguration) -> None:
        """Moving from Rack A at 3 to Rack B at 10 updates both item sets."""
        original = two_racks.find_component("server-1")
        updated = move_component(two_racks, "server-1", "rack-b", 10)

        assert updated is not None
        assert not updated.find_rack("rack-a").contains("server-1")
        moved = updated.find_rack("rack-b").find_component("server-1")
        assert moved == replace(original, position=10)

    def test_component_in_exactly_one_rack(self, two_racks: RackConfiguration) -> None:
        updated = move_component(two_racks, "server-1", "rack-b", 10)
        holders = [r.id for r in updated if r.contains("server-1")]
        assert holders == ["rack-b"]

    def test_all_attributes_preserved(self) -> None:
        component = RackComponent(
            id="db",
            name="DB",
            height=2,
            position=5,
            type=ComponentType.STORAGE,
            color="#123456",
            weight=12.0,
            metadata={"serialNumber": "SN-9"},
            tags=("prod",),
        )
        configuration = RackConfiguration(
            racks=(
                Rack(id="a", name="A", height=42, components=(component,)),
                Rack(id="b", name="B", height=42),
            )
        )
        updated = move_component(configuration, "db", "b", 30)
        moved = updated.find_component("db")
        assert moved.id == "db"
        assert moved.color == "#123456"
        assert moved.metadata == {"serialNumber": "SN-9"}
        assert moved.tags == ("prod",)
        assert moved.position == 30

    def test_target_collision_rejected(self, two_racks: RackConfiguration) -> None:
        occupied = two_racks.replace_rack(
            two_racks.find_rack("rack-b").with_components(
                (RackComponent(id="x", name="X", height=1, position=10),)
            )
        )
        assert move_component(occupied, "server-1", "rack-b", 9) is None

    def test_component_not_excluded_in_target_rack(self) -> None:
        """Only the source rack ignores the moving component."""
        configuration = RackConfiguration(
            racks=(
                Rack(
                    id="a",
                    name="A",
                    height=42,
                    components=(RackComponent(id="m", name="M", height=2, position=5),),
                ),
                Rack(
                    id="b",
                    name="B",
                    height=42,
                    components=(RackComponent(id="n", name="N", height=2, position=5),),
                ),
            )
        )
        assert move_component(configuration, "m", "b", 5) is None

    def test_target_too_short_rejected(self, two_racks: RackConfiguration) -> None:
        assert move_component(two_racks, "server-1", "rack-b", 24) is None

    def test_rejected_transfer_leaves_input(self, two_racks: RackConfiguration) -> None:
        move_component(two_racks, "server-1", "rack-b", 24)
        assert two_racks.find_rack("rack-a").contains("server-1")
        assert two_racks.find_rack("rack-b").components == ()


class TestUnknownReferences:
    """Moves with unknown ids are rejected."""

    def test_unknown_component(self, two_racks: RackConfiguration) -> None:
        assert move_component(two_racks, "missing", "rack-a", 1) is None

    def test_unknown_rack(self, two_racks: RackConfiguration) -> None:
        assert move_component(two_racks, "server-1", "missing", 1) is None
