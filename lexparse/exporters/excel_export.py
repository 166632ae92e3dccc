"""
Excel exporter for lexparse.

Writes a single workbook with one sheet per level.
"""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar

import pandas as pd

from lexparse.core.records import ParsedData, columns_for
from lexparse.exporters.base import BaseExporter, ExporterRegistry


@ExporterRegistry.register
class ExcelExporter(BaseExporter):
    """
    Export records as an .xlsx workbook.

    Sheets are named after the level tables (Parts, Sections, ...) and
    use the same column order as the CSV export. Empty levels still get
    a sheet with a header row.
    """

    EXPORTER_NAME: ClassVar[str] = "xlsx"
    FILE_EXTENSION: ClassVar[str] = ".xlsx"

    def export(self, data: ParsedData, path: Path) -> Path:
        path = self._ensure_extension(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for level, records in data.iter_levels():
                frame = pd.DataFrame(
                    [record.to_row() for record in records],
                    columns=columns_for(level),
                )
                frame.to_excel(writer, sheet_name=level.table, index=False)

        return path
