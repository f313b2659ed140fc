"""Unit tests for component distance calculation.

These tests verify:
- Center-to-center distance between two 1U components
- Edge-based ranges when either component is taller than 1U
- Conversion to inches and centimeters
- Symmetry and ordering of per-rack distance lists
"""

import pytest

from racks.domain import (
    DistanceUnit,
    Rack,
    RackComponent,
    distance,
    distances_from,
)


def item(component_id: str, position: int, height: int = 1) -> RackComponent:
    return RackComponent(
        id=component_id, name=component_id.upper(), height=height, position=position
    )


class TestPointDistance:
    """Distance between two 1U components."""

    def test_rack_units(self) -> None:
        result = distance(item("a", 10), item("b", 20), DistanceUnit.RACK_UNITS)
        assert result.value == 10.0
        assert not result.is_range

    def test_inches(self) -> None:
        result = distance(item("a", 10), item("b", 20), DistanceUnit.INCHES)
        assert result.value == 17.5
        assert result.format() == "17.5 inches"

    def test_centimeters(self) -> None:
        result = distance(item("a", 10), item("b", 12), DistanceUnit.CENTIMETERS)
        assert result.minimum == pytest.approx(8.89)
        assert result.format() == "8.9 cm"

    def test_adjacent(self) -> None:
        assert distance(item("a", 10), item("b", 11)).value == 1.0

    def test_default_unit_is_rack_units(self) -> None:
        assert distance(item("a", 1), item("b", 2)).unit is DistanceUnit.RACK_UNITS


class TestRangeDistance:
    """Distance when at least one component is taller than 1U."""

    def test_gap_and_span(self) -> None:
        """[10, 11] and [14, 15]: 2U gap, 6U from bottom edge to top edge."""
        result = distance(item("a", 10, 2), item("b", 14, 2))
        assert result.is_range
        assert result.value == (2.0, 6.0)
        assert result.format() == "2.0-6.0 U"

    def test_adjacent_tall_items(self) -> None:
        result = distance(item("a", 10, 2), item("b", 12, 1))
        assert result.minimum == 0.0
        assert result.maximum == 3.0

    def test_overlapping_items_have_zero_gap(self) -> None:
        result = distance(item("a", 10, 4), item("b", 12, 1))
        assert result.minimum == 0.0
        assert result.maximum == 4.0

    def test_converted_range(self) -> None:
        result = distance(item("a", 10, 2), item("b", 14, 2), DistanceUnit.INCHES)
        assert result.format() == "3.5-10.5 inches"

    @pytest.mark.parametrize(
        "first,second",
        [
            (item("a", 10), item("b", 20)),
            (item("a", 3, 2), item("b", 30, 4)),
            (item("a", 10, 4), item("b", 12, 1)),
        ],
    )
    def test_symmetric(self, first: RackComponent, second: RackComponent) -> None:
        for unit in DistanceUnit:
            assert distance(first, second, unit) == distance(second, first, unit)


class TestDistancesFrom:
    """Tests for the per-rack distance list."""

    def test_lists_other_components_top_first(self) -> None:
        rack = Rack(
            id="r",
            name="R",
            height=42,
            components=(item("ref", 20), item("low", 5), item("high", 35)),
        )
        entries = distances_from(rack, "ref", DistanceUnit.RACK_UNITS)
        assert [e.component.id for e in entries] == ["high", "low"]
        assert [e.distance.value for e in entries] == [15.0, 15.0]

    def test_defaults_to_inches(self) -> None:
        rack = Rack(id="r", name="R", height=42, components=(item("a", 1), item("b", 2)))
        entries = distances_from(rack, "a")
        assert entries[0].distance.unit is DistanceUnit.INCHES

    def test_single_component(self) -> None:
        rack = Rack(id="r", name="R", height=42, components=(item("a", 1),))
        assert distances_from(rack, "a") == []

    def test_unknown_component(self) -> None:
        rack = Rack(id="r", name="R", height=42, components=(item("a", 1),))
        assert distances_from(rack, "missing") == []
