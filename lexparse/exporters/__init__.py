"""Export formats for lexparse."""

from lexparse.exporters.base import BaseExporter, ExporterRegistry
from lexparse.exporters.csv_export import CSVExporter
from lexparse.exporters.excel_export import ExcelExporter
from lexparse.exporters.json_export import JSONExporter
from lexparse.exporters.sql import DIALECTS, SQLGenerator, escape_sql_string
from lexparse.exporters.sql_export import SQLExporter

__all__ = [
    "BaseExporter",
    "CSVExporter",
    "DIALECTS",
    "ExcelExporter",
    "ExporterRegistry",
    "JSONExporter",
    "SQLExporter",
    "SQLGenerator",
    "escape_sql_string",
]
