"""API routers for the REST API."""

from racks.web.routers.configurations import router as configurations_router
from racks.web.routers.distance import router as distance_router
from racks.web.routers.export import router as export_router
from racks.web.routers.placement import router as placement_router
from racks.web.routers.validate import router as validate_router

__all__ = [
    "configurations_router",
    "distance_router",
    "export_router",
    "placement_router",
    "validate_router",
]
