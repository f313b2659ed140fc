"""Configuration import endpoint."""

from fastapi import APIRouter

from racks.application import RackPlanner
from racks.application.config import configuration_to_data, validate_configuration
from racks.web.dependencies import parse_configuration
from racks.web.schemas.requests import ConfigurationRequest
from racks.web.schemas.responses import ConfigurationSchema, IssueSchema

router = APIRouter(prefix="/configurations", tags=["configurations"])


@router.post("/import", response_model=ConfigurationSchema)
async def import_configuration(request: ConfigurationRequest) -> ConfigurationSchema:
    """Normalize an uploaded configuration into the current format.

    Legacy encodings (a bare rack object, single-axis PDU and ethernet
    placement, a top-level IP address) are upgraded. Configurations that
    break layout rules are rejected as a whole.
    """
    planner = RackPlanner()
    planner.load(parse_configuration(request))

    configuration = planner.snapshot()
    result = validate_configuration(configuration)
    return ConfigurationSchema(
        racks=configuration_to_data(configuration),
        warnings=[IssueSchema(path=w.path, message=w.message) for w in result.warnings],
    )
