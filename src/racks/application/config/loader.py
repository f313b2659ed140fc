"""Configuration file loader with comprehensive error handling.

This module loads rack configurations from JSON files or already-parsed
data. Both the current format (an array of racks) and the legacy format (a
single bare rack object) are accepted; the result is always a
RackConfiguration holding one or more racks. File system errors, JSON
parsing errors and Pydantic validation errors are reported as ConfigError
with clear, actionable messages. No partial load ever happens.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from racks.application.config.adapter import schema_to_configuration
from racks.application.config.schema import LEGACY_CONTEXT, RackSchema
from racks.domain.entities import RackConfiguration

logger = logging.getLogger(__name__)

_RACK_LIST = TypeAdapter(list[RackSchema])


class ConfigError(Exception):
    """Exception raised for configuration-related errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation, layout)
        path: Path to the configuration file (if applicable)
        details: Additional error details (line/column for JSON, validation errors, etc.)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        """Format error message for display."""
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path((0, "components", 2, "height"))
        '[0].components[2].height'
        >>> _format_json_path(("name",))
        'name'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            # Array index - append to last part with brackets
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    """Extract and format validation errors from a Pydantic ValidationError."""
    details: list[dict[str, Any]] = []
    for err in error.errors():
        value = err.get("input")
        # Whole objects are too noisy to echo back
        if isinstance(value, (dict, list)):
            value = None
        details.append(
            {
                "path": _format_json_path(err["loc"]),
                "message": err["msg"],
                "value": value,
                "error_type": err["type"],
            }
        )
    return details


def _format_validation_error_message(details: list[dict[str, Any]]) -> str:
    """Format validation error details into a human-readable message."""
    lines = ["Configuration validation failed:"]
    for detail in details:
        path = detail["path"] or "<root>"
        message = detail["message"]
        value = detail.get("value")
        if value is not None:
            lines.append(f"  - {path}: {message} (got: {value!r})")
        else:
            lines.append(f"  - {path}: {message}")
    return "\n".join(lines)


def load_config_from_data(data: Any, path: Path | None = None) -> RackConfiguration:
    """Validate parsed JSON data and build a RackConfiguration.

    Args:
        data: A list of rack objects, or a single legacy rack object.
        path: Source file, used only for error reporting.

    Returns:
        The validated configuration with legacy encodings upgraded.

    Raises:
        ConfigError: If the data is neither a rack list nor a well-formed
            single rack object.
    """
    try:
        if isinstance(data, list):
            racks = _RACK_LIST.validate_python(data, context=LEGACY_CONTEXT)
        elif isinstance(data, dict):
            logger.debug("Upgrading legacy single-rack configuration")
            racks = [RackSchema.model_validate(data, context=LEGACY_CONTEXT)]
        else:
            raise ConfigError(
                message=(
                    "Invalid rack configuration: expected an array of racks "
                    f"or a single rack object, got {type(data).__name__}"
                ),
                error_type="validation",
                path=path,
            )
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(details),
            error_type="validation",
            path=path,
            details=details,
        ) from e

    configuration = schema_to_configuration(racks)
    logger.info(
        f"Loaded {len(configuration)} rack(s) with "
        f"{sum(len(r.components) for r in configuration)} component(s)"
    )
    return configuration


def load_config(path: Path) -> RackConfiguration:
    """Load and validate a rack configuration from a JSON file.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
            The error_type attribute indicates the specific error category:
            - "file_not_found": File does not exist
            - "permission_denied" / "file_read_error": File cannot be read
            - "json_parse": Invalid JSON syntax
            - "validation": Schema validation failed
    """
    if not path.exists():
        raise ConfigError(
            message=f"Config file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading config file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading config file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=f"Invalid JSON in config file: {path} (line {e.lineno}, column {e.colno}): {e.msg}",
            error_type="json_parse",
            path=path,
            details=[
                {
                    "line": e.lineno,
                    "column": e.colno,
                    "message": e.msg,
                }
            ],
        )

    return load_config_from_data(data, path=path)
