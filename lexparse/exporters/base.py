"""
Base exporter class and registry.

All exporters inherit from BaseExporter and register themselves
with the ExporterRegistry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, ClassVar

from lexparse.core.errors import ExportError
from lexparse.core.records import ParsedData


class BaseExporter(ABC):
    """
    Abstract base class for parsed-code exporters.

    Exporters write the seven per-level record lists to a storage
    format consumed outside lexparse.
    """

    EXPORTER_NAME: ClassVar[str] = "base"
    FILE_EXTENSION: ClassVar[str] = ""

    @abstractmethod
    def export(self, data: ParsedData, path: Path) -> Path:
        """
        Export parsed records.

        Args:
            data: Flattened parse output
            path: Output path

        Returns:
            Path to the exported file or directory
        """

    def _ensure_extension(self, path: Path) -> Path:
        """Ensure the path has the correct extension."""
        if path.suffix.lower() != self.FILE_EXTENSION.lower():
            return path.with_suffix(self.FILE_EXTENSION)
        return path


class ExporterRegistry:
    """Registry of available exporters."""

    _exporters: ClassVar[dict[str, type[BaseExporter]]] = {}

    @classmethod
    def register(cls, exporter_class: type[BaseExporter]) -> type[BaseExporter]:
        """Register an exporter class."""
        cls._exporters[exporter_class.EXPORTER_NAME] = exporter_class
        return exporter_class

    @classmethod
    def get_exporter(cls, name: str, **options: Any) -> BaseExporter | None:
        """Get an exporter by name, passing *options* to its constructor."""
        exporter_class = cls._exporters.get(name)
        if exporter_class:
            return exporter_class(**options)
        return None

    @classmethod
    def available_exporters(cls) -> list[str]:
        """Get list of available exporter names."""
        return list(cls._exporters.keys())

    @classmethod
    def export(cls, data: ParsedData, path: Path, format: str, **options: Any) -> Path:
        """Export records using the specified format.

        Raises:
            ExportError: If *format* is not registered.
        """
        exporter = cls.get_exporter(format, **options)
        if exporter is None:
            available = ", ".join(cls.available_exporters())
            raise ExportError(f"Unknown export format: {format}. Available: {available}")
        return exporter.export(data, path)
