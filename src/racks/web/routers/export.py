"""Export format endpoints."""

import logging
import tempfile
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import Response

from racks.infrastructure.exporters import ExportError, ExporterRegistry
from racks.web.dependencies import ExporterDep, parse_configuration
from racks.web.schemas.requests import ConfigurationRequest
from racks.web.schemas.responses import ExportFormatsSchema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/export", tags=["export"])


@router.get("/formats", response_model=ExportFormatsSchema)
async def list_export_formats() -> ExportFormatsSchema:
    """List all available export formats."""
    return ExportFormatsSchema(formats=ExporterRegistry.available_formats())


@router.post("/{format_name}")
async def export(
    format_name: str,
    request: ConfigurationRequest,
    exporter: ExporterDep,
) -> Response:
    """Export a configuration and return the file as a download.

    Raises:
        UnsupportedFormatError: If no exporter is registered for the format.
        ExportError: If the exporter fails.
    """
    configuration = parse_configuration(request)
    filename = f"racks.{exporter.file_extension}"

    with tempfile.TemporaryDirectory() as tmp_dir:
        tmp_path = Path(tmp_dir) / filename
        try:
            exporter.export(configuration, tmp_path)
        except (OSError, ValueError) as e:
            logger.warning(f"Export to {format_name} failed: {e}")
            raise ExportError(format_name, str(e)) from e
        content = tmp_path.read_bytes()

    return Response(
        content=content,
        media_type=exporter.media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
