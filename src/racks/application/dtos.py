"""Data Transfer Objects for the application layer."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from racks.domain import (
    MAX_RACK_HEIGHT,
    MIN_RACK_HEIGHT,
    ComponentType,
    EthernetConfig,
    PduConfig,
)


@dataclass
class MutationResult:
    """Outcome of a state mutation.

    Rejected mutations carry their error messages and leave state unchanged.

    Attributes:
        ok: True if the mutation was applied.
        errors: Human-readable reasons for a rejection.
        entity_id: Identifier of the created or affected entity.
    """

    ok: bool = True
    errors: list[str] = field(default_factory=list)
    entity_id: str | None = None

    @classmethod
    def rejected(cls, *errors: str) -> "MutationResult":
        return cls(ok=False, errors=list(errors))

    @classmethod
    def applied(cls, entity_id: str | None = None) -> "MutationResult":
        return cls(ok=True, entity_id=entity_id)

    def __bool__(self) -> bool:
        return self.ok


@dataclass
class ComponentDraft:
    """Input DTO for a component about to be added to a rack.

    When `position` is None the topmost free slot is used.
    """

    name: str
    height: int = 1
    position: int | None = None
    type: ComponentType = ComponentType.COMPUTE
    color: str | None = None
    weight: float | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    tags: list[str] = field(default_factory=list)
    pdu_config: PduConfig | None = None
    ethernet_config: EthernetConfig | None = None

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if not self.name.strip():
            errors.append("Please enter a component name")
        if self.height < 1:
            errors.append("Component height must be at least 1U")
        return errors


@dataclass
class RackInput:
    """Input DTO for a new rack.

    `height` accepts an integer or text such as "42" or "42U".
    """

    name: str
    height: int | str = 42

    def parsed_height(self) -> int | None:
        return parse_rack_height(self.height)

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if not self.name.strip():
            errors.append("Please enter a rack name")
        height = self.parsed_height()
        if height is None:
            errors.append("Please enter a valid height")
        elif height < MIN_RACK_HEIGHT:
            errors.append(f"Rack height must be at least {MIN_RACK_HEIGHT}U")
        elif height > MAX_RACK_HEIGHT:
            errors.append(f"Rack height cannot exceed {MAX_RACK_HEIGHT}U")
        return errors


_HEIGHT_PATTERN = re.compile(r"^\s*(-?\d+)\s*u?\s*$", re.IGNORECASE)


def parse_rack_height(value: int | str) -> int | None:
    """Parse a rack height given as a number or text with an optional U suffix.

    Examples:
        >>> parse_rack_height("42U")
        42
        >>> parse_rack_height(" 24 ")
        24
        >>> parse_rack_height("tall") is None
        True
    """
    if isinstance(value, int):
        return value
    match = _HEIGHT_PATTERN.match(value)
    return int(match.group(1)) if match else None


def normalize_tag(tag: str) -> str:
    """Lower-case a tag and join whitespace-separated words with hyphens."""
    return re.sub(r"\s+", "-", tag.strip().lower())
