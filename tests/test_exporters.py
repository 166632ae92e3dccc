"""Tests for exporters."""

import csv
import json

import pandas as pd
import pytest

from lexparse.core.errors import ExportError
from lexparse.core.records import ParsedData
from lexparse.exporters import CSVExporter, ExcelExporter, ExporterRegistry, JSONExporter, SQLExporter


class TestExporterRegistry:
    def test_available_exporters(self):
        assert {"csv", "xlsx", "sql", "json"} <= set(ExporterRegistry.available_exporters())

    def test_get_exporter_with_options(self):
        exporter = ExporterRegistry.get_exporter("sql", dialect="mssql")
        assert isinstance(exporter, SQLExporter)
        assert exporter.generator.dialect.name == "mssql"

    def test_unknown_format(self, sample_data, tmp_path):
        with pytest.raises(ExportError, match="Unknown export format"):
            ExporterRegistry.export(sample_data, tmp_path / "out", "yaml")


class TestCSVExporter:
    def test_writes_one_file_per_level(self, sample_data, tmp_path):
        out = CSVExporter().export(sample_data, tmp_path / "csv")
        names = sorted(p.name for p in out.iterdir())
        assert names == sorted(
            f"{key}.csv" for key in sample_data.counts()
        )

    def test_article_rows(self, sample_data, tmp_path):
        out = CSVExporter().export(sample_data, tmp_path / "csv")
        with open(out / "articles.csv", encoding="utf-8", newline="") as f:
            rows = list(csv.reader(f))
        assert rows[0] == [
            "PartNumber",
            "SectionNumber",
            "ChapterNumber",
            "ParagraphNumber",
            "ArticleNumber",
            "NameRu",
            "NameKz",
        ]
        assert rows[3] == ["1", "1", "2", "1", "1", "Правоспособность", "Құқық қабілеттілігі"]
        assert len(rows) == 5

    def test_render_in_memory(self, sample_data):
        rendered = CSVExporter().render(sample_data)
        assert set(rendered) == set(sample_data.counts())
        assert rendered["parts"].splitlines()[0] == "PartNumber,NameRu,NameKz"
        assert rendered["parts"].splitlines()[1] == "1,Общая часть,Жалпы бөлім"

    def test_empty_levels_have_header(self, tmp_path):
        out = CSVExporter().export(ParsedData(), tmp_path / "csv")
        assert (out / "clauses.csv").read_text(encoding="utf-8").strip() == (
            "PartNumber,SectionNumber,ChapterNumber,ParagraphNumber,"
            "ArticleNumber,ClauseNumber,NameRu,NameKz"
        )


class TestExcelExporter:
    def test_one_sheet_per_level(self, sample_data, tmp_path):
        path = ExcelExporter().export(sample_data, tmp_path / "code")
        assert path.suffix == ".xlsx"

        sheets = pd.read_excel(path, sheet_name=None, engine="openpyxl")
        assert list(sheets) == [
            "Parts",
            "Sections",
            "Chapters",
            "Paragraphs",
            "Articles",
            "Clauses",
            "SubClauses",
        ]
        articles = sheets["Articles"]
        assert list(articles["ArticleNumber"]) == [1, 2, 1, 3]
        assert list(articles["ChapterNumber"]) == [1, 1, 2, 3]

    def test_empty_data(self, tmp_path):
        path = ExcelExporter().export(ParsedData(), tmp_path / "empty.xlsx")
        sheet = pd.read_excel(path, sheet_name="Sections", engine="openpyxl")
        assert list(sheet.columns) == ["PartNumber", "SectionNumber", "NameRu", "NameKz"]
        assert sheet.empty


class TestSQLExporter:
    def test_writes_script(self, sample_data, tmp_path):
        path = SQLExporter().export(sample_data, tmp_path / "dump")
        assert path.name == "dump.sql"
        script = path.read_text(encoding="utf-8")
        assert "CREATE TABLE IF NOT EXISTS Parts" in script
        assert script.count("INSERT INTO") == 15

    def test_mssql_dialect(self, sample_data, tmp_path):
        path = SQLExporter(dialect="mssql").export(sample_data, tmp_path / "dump.sql")
        assert "N'Общая часть'" in path.read_text(encoding="utf-8")


class TestJSONExporter:
    def test_export(self, sample_data, tmp_path):
        path = JSONExporter().export(sample_data, tmp_path / "code")
        payload = json.loads(path.read_text(encoding="utf-8"))
        assert payload["exporter"] == "lexparse"
        assert payload["counts"]["articles"] == 4
        assert payload["parsed_data"]["sections"][1]["parent_part_id"] == 1
        assert ParsedData.from_dict(payload["parsed_data"]) == sample_data
