"""Distance endpoint."""

from fastapi import APIRouter

from racks.domain import ComponentDistance, distance, distances_from
from racks.web.dependencies import parse_configuration, require_component
from racks.web.exceptions import PlacementRejectedError
from racks.web.schemas.requests import DistanceRequest
from racks.web.schemas.responses import DistanceListSchema, DistanceSchema

router = APIRouter(prefix="/distance", tags=["distance"])


def _to_schema(entry: ComponentDistance) -> DistanceSchema:
    result = entry.distance
    return DistanceSchema(
        component_id=entry.component.id,
        component_name=entry.component.name,
        minimum=round(result.minimum, 1),
        maximum=round(result.maximum, 1),
        is_range=result.is_range,
        unit=result.unit.value,
        formatted=result.format(),
    )


@router.post("", response_model=DistanceListSchema)
async def measure(request: DistanceRequest) -> DistanceListSchema:
    """Distance from a component to another one, or to every rack neighbour."""
    configuration = parse_configuration(request)
    reference = require_component(configuration, request.component_id)
    rack = configuration.rack_of(reference.id)
    assert rack is not None

    if request.other_component_id is None:
        entries = distances_from(rack, reference.id, request.unit)
    else:
        other = require_component(configuration, request.other_component_id)
        if not rack.contains(other.id):
            raise PlacementRejectedError(
                [f"'{reference.name}' and '{other.name}' are in different racks"]
            )
        entries = [
            ComponentDistance(
                component=other, distance=distance(reference, other, request.unit)
            )
        ]

    return DistanceListSchema(
        component_id=reference.id,
        distances=[_to_schema(e) for e in entries],
    )
