"""Base exporter framework with Protocol, Registry, and Manager."""

from __future__ import annotations

import logging
from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from racks.domain.entities import RackConfiguration


logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Raised when an export adapter fails to produce its output.

    Attributes:
        format_name: The format that failed.
        message: Human-readable reason.
    """

    def __init__(self, format_name: str, message: str) -> None:
        self.format_name = format_name
        self.message = message
        super().__init__(f"Export to '{format_name}' failed: {message}")


@runtime_checkable
class Exporter(Protocol):
    """Protocol for all exporters.

    Exporters convert a read-only RackConfiguration snapshot to a specific
    format. They never modify the configuration.

    Attributes:
        format_name: Identifier of the export format (e.g., "json", "xlsx").
        file_extension: File extension without leading dot.
        media_type: MIME type used when the export is served over HTTP.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]
    media_type: ClassVar[str]

    @abstractmethod
    def export(self, configuration: RackConfiguration, path: Path) -> None:
        """Export the configuration to a file.

        Args:
            configuration: The racks to export.
            path: Path where the file will be saved.
        """
        ...

    def export_string(self, configuration: RackConfiguration) -> str:
        """Export the configuration as a string.

        Not all formats support string export (e.g., xlsx workbooks).

        Raises:
            NotImplementedError: If the format does not support string export.
        """
        raise NotImplementedError(
            f"Format '{self.format_name}' does not support string export"
        )


class ExporterRegistry:
    """Registry for exporter classes.

    Exporters register themselves using the @ExporterRegistry.register
    decorator.

    Example:
        @ExporterRegistry.register("json")
        class JsonExporter:
            format_name = "json"
            file_extension = "json"
            ...
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str) -> type:
        """Decorator to register an exporter class under `format_name`."""

        def decorator(exporter_class: type[Exporter]) -> type[Exporter]:
            if format_name in cls._exporters:
                logger.warning(
                    f"Overwriting existing exporter for format '{format_name}'"
                )
            cls._exporters[format_name] = exporter_class
            logger.debug(f"Registered exporter '{format_name}': {exporter_class.__name__}")
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Get an exporter class by format name.

        Raises:
            KeyError: If no exporter is registered for the format.
        """
        if format_name not in cls._exporters:
            available = ", ".join(sorted(cls._exporters.keys()))
            raise KeyError(
                f"No exporter registered for format '{format_name}'. "
                f"Available formats: {available or 'none'}"
            )
        return cls._exporters[format_name]

    @classmethod
    def available_formats(cls) -> list[str]:
        """Sorted list of registered format names."""
        return sorted(cls._exporters.keys())

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters


class ExportManager:
    """Manages export operations to multiple formats.

    Attributes:
        output_dir: Directory where exported files will be saved.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def export_all(
        self,
        formats: list[str],
        configuration: RackConfiguration,
        project_name: str = "rack",
    ) -> dict[str, Path]:
        """Export the configuration to several formats.

        Files are named ``{project_name}_{format}.{ext}``.

        Returns:
            Dictionary mapping format names to output file paths.

        Raises:
            KeyError: If any format is not registered.
            ExportError: If an exporter fails.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        results: dict[str, Path] = {}

        for format_name in formats:
            exporter_class = ExporterRegistry.get(format_name)
            exporter = exporter_class()

            filename = f"{project_name}_{format_name}.{exporter.file_extension}"
            filepath = self.output_dir / filename

            logger.info(f"Exporting to {format_name}: {filepath}")
            try:
                exporter.export(configuration, filepath)
            except ExportError:
                raise
            except (OSError, ValueError) as e:
                raise ExportError(format_name, str(e)) from e
            results[format_name] = filepath

        return results

    def export_single(
        self,
        format_name: str,
        configuration: RackConfiguration,
        project_name: str = "rack",
    ) -> Path:
        """Export the configuration to one format and return the file path."""
        results = self.export_all([format_name], configuration, project_name)
        return results[format_name]
