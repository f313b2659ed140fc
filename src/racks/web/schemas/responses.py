"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class IssueSchema(BaseModel):
    """A validation error or warning."""

    path: str = Field(..., description="JSON path of the offending item")
    message: str = Field(..., description="Human-readable description")


class ValidationResultSchema(BaseModel):
    """Response for configuration validation."""

    is_valid: bool = Field(..., description="Whether configuration is valid")
    errors: list[IssueSchema] = Field(default_factory=list, description="Blocking errors")
    warnings: list[IssueSchema] = Field(
        default_factory=list, description="Non-blocking advisories"
    )


class ConfigurationSchema(BaseModel):
    """A normalized configuration in the current persisted format."""

    racks: list[dict[str, Any]] = Field(..., description="Racks in the current format")
    warnings: list[IssueSchema] = Field(
        default_factory=list, description="Advisories for the configuration"
    )


class PlacementCheckSchema(BaseModel):
    """Response for a placement check."""

    valid: bool = Field(..., description="Whether the placement is legal")
    reason: str = Field(..., description="ok, invalid_height, out_of_bounds or overlap")
    message: str = Field(..., description="Human-readable outcome")
    conflicts: list[str] = Field(
        default_factory=list, description="Ids of components the placement overlaps"
    )


class NextPositionSchema(BaseModel):
    """Response for the default slot of a new component."""

    position: int = Field(..., description="Proposed bottom unit slot")
    fits: bool = Field(
        ..., description="False when the rack has no free run and the slot is a fallback"
    )


class DistanceSchema(BaseModel):
    """Distance to one component."""

    component_id: str
    component_name: str
    minimum: float = Field(..., description="Smallest distance, rounded to 0.1")
    maximum: float = Field(..., description="Largest distance, rounded to 0.1")
    is_range: bool = Field(..., description="Whether minimum and maximum differ")
    unit: str
    formatted: str = Field(..., description="Display string, e.g. '17.5 inches'")


class DistanceListSchema(BaseModel):
    """Response for distance queries."""

    component_id: str = Field(..., description="Reference component")
    distances: list[DistanceSchema] = Field(default_factory=list)


class ExportFormatsSchema(BaseModel):
    """Available export formats."""

    formats: list[str] = Field(..., description="List of available format names")


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error category")
    details: Any = Field(default=None, description="Additional details")
