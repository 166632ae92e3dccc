"""
CSV exporter for lexparse.

Writes one CSV file per level into a directory, for spreadsheets or bulk
database loaders.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import ClassVar

from lexparse.core.levels import Level
from lexparse.core.records import LevelRecord, ParsedData, columns_for
from lexparse.exporters.base import BaseExporter, ExporterRegistry


@ExporterRegistry.register
class CSVExporter(BaseExporter):
    """
    Export records as CSV, one file per level.

    Columns are the ancestor numbers shallowest first, then the
    heading's own number, then NameRu and NameKz.
    """

    EXPORTER_NAME: ClassVar[str] = "csv"
    FILE_EXTENSION: ClassVar[str] = ".csv"

    def export(self, data: ParsedData, path: Path) -> Path:
        """Write ``<key>.csv`` for every level into directory *path*."""
        path.mkdir(parents=True, exist_ok=True)
        for level, records in data.iter_levels():
            target = path / f"{level.key}{self.FILE_EXTENSION}"
            with open(target, "w", newline="", encoding="utf-8") as f:
                self._write(f, level, records)
        return path

    def render(self, data: ParsedData) -> dict[str, str]:
        """Return ``{level key: csv text}`` without touching the disk."""
        rendered = {}
        for level, records in data.iter_levels():
            buffer = io.StringIO()
            self._write(buffer, level, records)
            rendered[level.key] = buffer.getvalue()
        return rendered

    def _write(self, f: io.TextIOBase, level: Level, records: list[LevelRecord]) -> None:
        writer = csv.writer(f)
        writer.writerow(columns_for(level))
        for record in records:
            writer.writerow(record.to_row())
