"""
JSON exporter for lexparse.

Exports all record lists as a single JSON file with export metadata,
suitable for debugging or custom integrations.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import ClassVar

from lexparse.core.records import SCHEMA_VERSION, ParsedData
from lexparse.exporters.base import BaseExporter, ExporterRegistry


@ExporterRegistry.register
class JSONExporter(BaseExporter):
    """Export records as a JSON file with counts and schema version."""

    EXPORTER_NAME: ClassVar[str] = "json"
    FILE_EXTENSION: ClassVar[str] = ".json"

    def export(self, data: ParsedData, path: Path) -> Path:
        path = self._ensure_extension(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        export_data = {
            "version": SCHEMA_VERSION,
            "exported_at": datetime.now().isoformat(),
            "exporter": "lexparse",
            "counts": data.counts(),
            "parsed_data": data.to_dict(),
        }

        with open(path, "w", encoding="utf-8") as f:
            json.dump(export_data, f, indent=2, ensure_ascii=False)

        return path
