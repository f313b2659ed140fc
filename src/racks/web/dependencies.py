"""FastAPI dependencies and request helpers shared by the routers."""

from typing import Annotated

from fastapi import Depends

from racks.application.config import load_config_from_data
from racks.domain import Rack, RackComponent, RackConfiguration
from racks.infrastructure.exporters import Exporter, ExporterRegistry
from racks.web.exceptions import NotFoundError, UnsupportedFormatError
from racks.web.schemas.requests import ConfigurationRequest


def parse_configuration(request: ConfigurationRequest) -> RackConfiguration:
    """Validate the request's configuration payload.

    Raises:
        ConfigError: If the payload is not a valid configuration.
    """
    return load_config_from_data(request.config)


def require_rack(configuration: RackConfiguration, rack_id: str) -> Rack:
    rack = configuration.find_rack(rack_id)
    if rack is None:
        raise NotFoundError("rack", rack_id)
    return rack


def require_component(
    configuration: RackConfiguration, component_id: str
) -> RackComponent:
    component = configuration.find_component(component_id)
    if component is None:
        raise NotFoundError("component", component_id)
    return component


def get_exporter(format_name: str) -> Exporter:
    """Dependency resolving the `format_name` path parameter to an exporter."""
    if not ExporterRegistry.is_registered(format_name):
        raise UnsupportedFormatError(format_name, ExporterRegistry.available_formats())
    return ExporterRegistry.get(format_name)()


# Type aliases for cleaner endpoint signatures
ExporterDep = Annotated[Exporter, Depends(get_exporter)]
