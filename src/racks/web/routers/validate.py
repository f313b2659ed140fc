"""Configuration validation endpoints."""

from fastapi import APIRouter

from racks.application.config import validate_configuration
from racks.web.dependencies import parse_configuration
from racks.web.schemas.requests import ConfigurationRequest
from racks.web.schemas.responses import IssueSchema, ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
async def validate(request: ConfigurationRequest) -> ValidationResultSchema:
    """Validate a rack configuration.

    Schema errors are reported as a 422 error response; layout errors and
    advisories are returned in the body.
    """
    result = validate_configuration(parse_configuration(request))

    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[IssueSchema(path=e.path, message=e.message) for e in result.errors],
        warnings=[IssueSchema(path=w.path, message=w.message) for w in result.warnings],
    )
