"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from racks.domain.value_objects import DistanceUnit


class ConfigurationRequest(BaseModel):
    """Request carrying a rack configuration in the persisted JSON format."""

    config: list[dict[str, Any]] | dict[str, Any] = Field(
        ..., description="Array of racks, or a single legacy rack object"
    )


class PlacementCheckRequest(ConfigurationRequest):
    """Request for checking a proposed placement."""

    rack_id: str = Field(..., description="Rack to place into")
    position: int = Field(..., description="Proposed bottom unit slot")
    height: int = Field(..., ge=1, description="Height in rack units")
    exclude_component_id: str | None = Field(
        default=None, description="Component ignored for collisions (the one being moved)"
    )


class NextPositionRequest(ConfigurationRequest):
    """Request for the default slot of a new component."""

    rack_id: str = Field(..., description="Rack to place into")
    height: int = Field(default=1, ge=1, description="Height in rack units")


class MoveRequest(ConfigurationRequest):
    """Request for moving a component within or across racks."""

    component_id: str = Field(..., description="Component to move")
    target_rack_id: str = Field(..., description="Destination rack")
    position: int = Field(..., description="New bottom unit slot")


class DistanceRequest(ConfigurationRequest):
    """Request for distances from one component."""

    component_id: str = Field(..., description="Reference component")
    other_component_id: str | None = Field(
        default=None,
        description="Second component; omit for every other component in the rack",
    )
    unit: DistanceUnit = Field(default=DistanceUnit.INCHES, description="Result unit")
