"""Pydantic schemas for the REST API."""

from racks.web.schemas.requests import (
    ConfigurationRequest,
    DistanceRequest,
    MoveRequest,
    NextPositionRequest,
    PlacementCheckRequest,
)
from racks.web.schemas.responses import (
    ConfigurationSchema,
    DistanceListSchema,
    DistanceSchema,
    ErrorResponseSchema,
    ExportFormatsSchema,
    IssueSchema,
    NextPositionSchema,
    PlacementCheckSchema,
    ValidationResultSchema,
)

__all__ = [
    # Requests
    "ConfigurationRequest",
    "DistanceRequest",
    "MoveRequest",
    "NextPositionRequest",
    "PlacementCheckRequest",
    # Responses
    "ConfigurationSchema",
    "DistanceListSchema",
    "DistanceSchema",
    "ErrorResponseSchema",
    "ExportFormatsSchema",
    "IssueSchema",
    "NextPositionSchema",
    "PlacementCheckSchema",
    "ValidationResultSchema",
]
