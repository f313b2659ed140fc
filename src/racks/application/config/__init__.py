"""Configuration loading, conversion and validation for rack layouts.

Usage:
    from racks.application.config import load_config, validate_configuration

    configuration = load_config(Path("rack-config.json"))
    result = validate_configuration(configuration)
    if not result.is_valid:
        for error in result.errors:
            print(f"{error.path}: {error.message}")
"""

from racks.application.config.adapter import (
    component_to_domain,
    component_to_schema,
    configuration_to_data,
    rack_to_domain,
    rack_to_schema,
    schema_to_configuration,
)
from racks.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_data,
)
from racks.application.config.schema import (
    ComponentSchema,
    EthernetConfigSchema,
    NetworkAddressSchema,
    NetworkInterfaceSchema,
    PduConfigSchema,
    RackSchema,
    SubComponentSchema,
)
from racks.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_configuration,
)

__all__ = [
    # Schema
    "ComponentSchema",
    "EthernetConfigSchema",
    "NetworkAddressSchema",
    "NetworkInterfaceSchema",
    "PduConfigSchema",
    "RackSchema",
    "SubComponentSchema",
    # Loading
    "ConfigError",
    "load_config",
    "load_config_from_data",
    # Conversion
    "component_to_domain",
    "component_to_schema",
    "configuration_to_data",
    "rack_to_domain",
    "rack_to_schema",
    "schema_to_configuration",
    # Validation
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate_configuration",
]
