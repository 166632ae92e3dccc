"""
SQL script exporter for lexparse.

Writes schema, clearing and insert statements to a .sql file.
"""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar

from lexparse.core.records import ParsedData
from lexparse.exporters.base import BaseExporter, ExporterRegistry
from lexparse.exporters.sql import SQLGenerator


@ExporterRegistry.register
class SQLExporter(BaseExporter):
    """Export records as a SQL script for the configured dialect."""

    EXPORTER_NAME: ClassVar[str] = "sql"
    FILE_EXTENSION: ClassVar[str] = ".sql"

    def __init__(self, dialect: str = "sqlite") -> None:
        self.generator = SQLGenerator(dialect)

    def export(self, data: ParsedData, path: Path) -> Path:
        path = self._ensure_extension(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.generator.script(data), encoding="utf-8")
        return path
