"""Value objects and enums for rack layout."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Rack height limits enforced when a rack is created
MIN_RACK_HEIGHT: int = 1
MAX_RACK_HEIGHT: int = 100

# 1U = 1.75 inches = 4.445 cm
INCHES_PER_UNIT: float = 1.75
CENTIMETERS_PER_UNIT: float = 4.445


class ComponentType(str, Enum):
    """Category of a rack component, used for default coloring and display."""

    COMPUTE = "compute"
    NETWORK = "network"
    STORAGE = "storage"
    POWER = "power"
    COOLING = "cooling"
    PATCH_PANEL = "patch_panel"
    OTHER = "other"


COMPONENT_COLORS: dict[ComponentType, str] = {
    ComponentType.COMPUTE: "#3B82F6",  # Blue
    ComponentType.NETWORK: "#10B981",  # Green
    ComponentType.STORAGE: "#F59E0B",  # Amber
    ComponentType.POWER: "#EF4444",  # Red
    ComponentType.COOLING: "#06B6D4",  # Cyan
    ComponentType.PATCH_PANEL: "#8B5CF6",  # Violet
    ComponentType.OTHER: "#6B7280",  # Gray
}


class AddressType(str, Enum):
    """Role of an address bound to a network interface."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    VIRTUAL = "virtual"
    MANAGEMENT = "management"


class FrontBack(str, Enum):
    """Which face of the rack a PDU is mounted on."""

    FRONT = "front"
    BACK = "back"


class Side(str, Enum):
    """Horizontal placement of a PDU within the rack."""

    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


class MetadataKey(str, Enum):
    """Well-known keys of the freeform component metadata mapping.

    Any other key is allowed and preserved unchanged.
    """

    DEVICE_NAME = "deviceName"
    POWER_CONSUMPTION = "powerConsumption"
    NOTES = "notes"
    IP_ADDRESS = "ipAddress"
    SUBNET = "subnet"
    SERIAL_NUMBER = "serialNumber"
    MODEL = "model"
    MANUFACTURER = "manufacturer"


class DistanceUnit(str, Enum):
    """Physical unit used to report distances between components."""

    RACK_UNITS = "U"
    CENTIMETERS = "cm"
    INCHES = "inches"

    @property
    def factor(self) -> float:
        """Multiplier converting rack units into this unit."""
        return _UNIT_FACTORS[self]


_UNIT_FACTORS: dict[DistanceUnit, float] = {
    DistanceUnit.RACK_UNITS: 1.0,
    DistanceUnit.CENTIMETERS: CENTIMETERS_PER_UNIT,
    DistanceUnit.INCHES: INCHES_PER_UNIT,
}


@dataclass(frozen=True)
class UnitRange:
    """Inclusive range of unit slots occupied by a component.

    Slots are 1-based and counted from the bottom of the rack.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(
                f"Range end ({self.end}) must not be below start ({self.start})"
            )

    @classmethod
    def from_height(cls, start: int, height: int) -> UnitRange:
        """Build the range covered by an item of `height` units at `start`."""
        if height < 1:
            raise ValueError("Height must be at least 1U")
        return cls(start=start, end=start + height - 1)

    @property
    def height(self) -> int:
        """Number of unit slots in the range."""
        return self.end - self.start + 1

    def overlaps(self, other: UnitRange) -> bool:
        """Check whether two ranges share at least one unit slot."""
        return self.start <= other.end and other.start <= self.end

    def within(self, rack_height: int) -> bool:
        """Check whether the range fits inside a rack of `rack_height` units."""
        return self.start >= 1 and self.end <= rack_height

    def __str__(self) -> str:
        return f"[{self.start}, {self.end}]"


# Two converted distances closer than this are reported as a single value
RANGE_TOLERANCE: float = 0.1


@dataclass(frozen=True)
class Distance:
    """Distance between two components, as a single value or a closed range.

    Attributes:
        minimum: Smallest edge-to-edge (or center) distance, already converted.
        maximum: Largest edge-to-edge distance, already converted.
        unit: Unit both values are expressed in.
    """

    minimum: float
    maximum: float
    unit: DistanceUnit = DistanceUnit.RACK_UNITS

    def __post_init__(self) -> None:
        if self.minimum < 0 or self.maximum < 0:
            raise ValueError("Distances must be non-negative")
        if self.maximum < self.minimum:
            raise ValueError("Maximum distance must not be below minimum")

    @property
    def is_range(self) -> bool:
        """True when minimum and maximum differ enough to report both."""
        return abs(self.minimum - self.maximum) >= RANGE_TOLERANCE

    @property
    def value(self) -> float | tuple[float, float]:
        """Display value rounded to one decimal place."""
        if self.is_range:
            return (round(self.minimum, 1), round(self.maximum, 1))
        return round(self.minimum, 1)

    def format(self) -> str:
        """Human-readable distance, e.g. ``17.5 inches`` or ``2.0-5.0 U``."""
        if self.is_range:
            return f"{self.minimum:.1f}-{self.maximum:.1f} {self.unit.value}"
        return f"{self.minimum:.1f} {self.unit.value}"

    def __str__(self) -> str:
        return self.format()
