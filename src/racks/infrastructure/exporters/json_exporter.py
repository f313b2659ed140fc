"""JSON exporter producing the persisted rack configuration format."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from racks.application.config.adapter import configuration_to_data
from racks.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from racks.domain.entities import RackConfiguration


@ExporterRegistry.register("json")
class JsonExporter:
    """Exports racks as a pretty-printed JSON array.

    The output is the current import format: camelCase keys, unset optional
    fields omitted. Loading it back yields an equal configuration.
    """

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"
    media_type: ClassVar[str] = "application/json"

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def export(self, configuration: RackConfiguration, path: Path) -> None:
        path.write_text(self.export_string(configuration), encoding="utf-8")

    def export_string(self, configuration: RackConfiguration) -> str:
        return json.dumps(
            configuration_to_data(configuration),
            indent=self.indent,
            ensure_ascii=False,
        )
