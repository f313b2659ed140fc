"""Placement endpoints: checks, auto-placement and moves."""

from fastapi import APIRouter

from racks.application import RackPlanner
from racks.application.config import configuration_to_data
from racks.domain import check_placement, is_valid_placement, next_available_position
from racks.web.dependencies import parse_configuration, require_component, require_rack
from racks.web.exceptions import PlacementRejectedError
from racks.web.schemas.requests import (
    MoveRequest,
    NextPositionRequest,
    PlacementCheckRequest,
)
from racks.web.schemas.responses import (
    ConfigurationSchema,
    NextPositionSchema,
    PlacementCheckSchema,
)

router = APIRouter(prefix="/placement", tags=["placement"])


@router.post("/check", response_model=PlacementCheckSchema)
async def check(request: PlacementCheckRequest) -> PlacementCheckSchema:
    """Check whether a component of `height` units fits at `position`."""
    configuration = parse_configuration(request)
    rack = require_rack(configuration, request.rack_id)

    result = check_placement(
        rack,
        request.position,
        request.height,
        exclude_item_id=request.exclude_component_id,
    )
    return PlacementCheckSchema(
        valid=result.valid,
        reason=result.reason,
        message=result.message,
        conflicts=[c.id for c in result.conflicts],
    )


@router.post("/next", response_model=NextPositionSchema)
async def next_position(request: NextPositionRequest) -> NextPositionSchema:
    """Propose the topmost free slot for a new component."""
    configuration = parse_configuration(request)
    rack = require_rack(configuration, request.rack_id)

    position = next_available_position(rack, request.height)
    return NextPositionSchema(
        position=position,
        fits=is_valid_placement(rack, position, request.height),
    )


@router.post("/move", response_model=ConfigurationSchema)
async def move(request: MoveRequest) -> ConfigurationSchema:
    """Move a component and return the updated configuration.

    An invalid move leaves the configuration unchanged and is reported as a
    422 error.
    """
    planner = RackPlanner()
    planner.load(parse_configuration(request))
    require_component(planner.configuration, request.component_id)
    require_rack(planner.configuration, request.target_rack_id)

    result = planner.move_component(
        request.component_id, request.target_rack_id, request.position
    )
    if not result.ok:
        raise PlacementRejectedError(result.errors)
    return ConfigurationSchema(racks=configuration_to_data(planner.snapshot()))
