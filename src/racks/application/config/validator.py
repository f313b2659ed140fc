"""Layout validation for rack configurations.

Schema validation (types, ranges, required fields) happens in the loader.
This module checks the layout invariants that span several objects: unique
identifiers, in-bounds placements and non-overlapping components.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations
from typing import Any

from racks.domain.entities import RackConfiguration
from racks.domain.services import find_free_position, occupied_range


@dataclass
class ValidationError:
    """Represents a blocking validation error.

    Attributes:
        path: JSON path to the invalid item (e.g., "[0].components[2]")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """Represents a non-blocking validation warning."""

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the configuration has no blocking errors."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """Get the CLI exit code based on validation status.

        Returns:
            0 if valid with no warnings
            1 if there are errors
            2 if valid but has warnings
        """
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self


def _check_identifiers(
    configuration: RackConfiguration, result: ValidationResult
) -> None:
    seen_racks: set[str] = set()
    seen_components: dict[str, str] = {}
    for r_index, rack in enumerate(configuration.racks):
        if rack.id in seen_racks:
            result.add_error(f"[{r_index}].id", "Duplicate rack id", rack.id)
        seen_racks.add(rack.id)
        for c_index, component in enumerate(rack.components):
            path = f"[{r_index}].components[{c_index}]"
            if component.id in seen_components:
                result.add_error(
                    f"{path}.id",
                    f"Duplicate component id (also used at {seen_components[component.id]})",
                    component.id,
                )
            else:
                seen_components[component.id] = path


def _check_placements(
    configuration: RackConfiguration, result: ValidationResult
) -> None:
    for r_index, rack in enumerate(configuration.racks):
        indexed = list(enumerate(rack.components))
        for c_index, component in indexed:
            unit_range = occupied_range(component)
            if not unit_range.within(rack.height):
                result.add_error(
                    f"[{r_index}].components[{c_index}].position",
                    f"'{component.name}' occupies {unit_range}, outside rack "
                    f"'{rack.name}' (1-{rack.height})",
                    component.position,
                )
        for (i, first), (j, second) in combinations(indexed, 2):
            if occupied_range(first).overlaps(occupied_range(second)):
                result.add_error(
                    f"[{r_index}].components[{j}].position",
                    f"'{second.name}' {occupied_range(second)} overlaps "
                    f"'{first.name}' {occupied_range(first)} "
                    f"(components[{i}]) in rack '{rack.name}'",
                    second.position,
                )


def _check_advisories(
    configuration: RackConfiguration, result: ValidationResult
) -> None:
    for r_index, rack in enumerate(configuration.racks):
        if not rack.components:
            result.add_warning(f"[{r_index}]", f"Rack '{rack.name}' is empty")
        elif find_free_position(rack, 1) is None:
            result.add_warning(
                f"[{r_index}]",
                f"Rack '{rack.name}' has no free unit left",
                suggestion="Add another rack for new equipment",
            )
        for c_index, component in enumerate(rack.components):
            if not component.name.strip():
                result.add_warning(
                    f"[{r_index}].components[{c_index}].name",
                    "Component has no name",
                )


def validate_configuration(configuration: RackConfiguration) -> ValidationResult:
    """Check layout invariants and advisories of a configuration.

    Errors: duplicate rack ids, component ids reused anywhere in the
    configuration, out-of-bounds placements, overlapping placements.
    Warnings: empty racks, full racks, unnamed components.
    """
    result = ValidationResult()
    _check_identifiers(configuration, result)
    _check_placements(configuration, result)
    _check_advisories(configuration, result)
    return result
