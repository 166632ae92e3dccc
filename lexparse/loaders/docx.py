"""
DOCX document loader using python-docx.

Emits one line per Word paragraph, in body order. Table rows become single
lines of cell text so that they read as body text to the parser.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar

from docx import Document
from docx.document import Document as DocxDocument
from docx.table import Table
from docx.text.paragraph import Paragraph

from lexparse.core.errors import LoaderError
from lexparse.loaders.base import BaseLoader, LoaderRegistry


@LoaderRegistry.register
class DocxLoader(BaseLoader):
    """Load DOCX documents using python-docx."""

    SUPPORTED_EXTENSIONS: ClassVar[list[str]] = [".docx"]
    LOADER_NAME: ClassVar[str] = "docx"

    def load_text(self, path: Path) -> tuple[str, dict[str, Any]]:
        try:
            doc = Document(str(path))
        except Exception as e:
            raise LoaderError(
                f"Failed to load DOCX: {e}",
                source_path=path,
                details=str(e),
            ) from e

        lines = self._extract_lines(doc)
        return "\n".join(lines), self._extract_metadata(doc, len(lines))

    def _extract_metadata(self, doc: DocxDocument, line_count: int) -> dict[str, Any]:
        core_props = doc.core_properties
        return {
            "title": core_props.title or None,
            "author": core_props.author or None,
            "line_count": line_count,
        }

    def _extract_lines(self, doc: DocxDocument) -> list[str]:
        lines: list[str] = []

        for element in doc.element.body:
            tag = element.tag.split("}")[-1]

            if tag == "p":
                text = Paragraph(element, doc).text
                lines.extend(text.splitlines() or [""])

            elif tag == "tbl":
                table = Table(element, doc)
                for row in table.rows:
                    cells = [cell.text.strip().replace("\n", " ") for cell in row.cells]
                    lines.append(" | ".join(cells))

        return lines
