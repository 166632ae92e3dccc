"""
High-level parse pipeline.

Ties the loaders, the tree builder, the flattener, numbering validation and
the exporters together. Both the HTTP server and the CLI go through here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lexparse.core.errors import ExportError
from lexparse.core.records import ParsedData
from lexparse.exporters import ExporterRegistry
from lexparse.hierarchy import (
    AttachMode,
    DocumentTree,
    Flattener,
    NumberingValidator,
    SplitMode,
    TitleSplitter,
    TreeBuilder,
)
from lexparse.loaders import LoadedText, LoaderRegistry

logger = logging.getLogger(__name__)

DEFAULT_FORMATS = ("csv", "xlsx", "sql")


@dataclass
class ParseResult:
    """Everything produced by parsing one document."""

    tree: DocumentTree
    data: ParsedData
    issues: list[dict[str, str]] = field(default_factory=list)
    source: LoadedText | None = None

    @property
    def document_id(self) -> str:
        return self.tree.document_id

    def to_dict(self) -> dict[str, Any]:
        result = {
            "document_id": self.document_id,
            "counts": self.data.counts(),
            "parsed_data": self.data.to_dict(),
            "diagnostics": self.tree.diagnostics.to_dict(),
            "issues": self.issues,
        }
        if self.source is not None:
            result["source"] = self.source.to_dict()
        return result


def parse_text(
    text: str,
    *,
    document_id: str = "doc",
    split_mode: SplitMode | str = SplitMode.SLASH,
    attach_mode: AttachMode | str = AttachMode.SHALLOWEST,
) -> ParseResult:
    """Parse decoded *text* into a tree, flat records and numbering issues."""
    builder = TreeBuilder(
        splitter=TitleSplitter(SplitMode(split_mode)),
        attach_mode=AttachMode(attach_mode),
    )
    tree = builder.build(text, document_id=document_id)
    data = Flattener.flatten(tree)
    issues = NumberingValidator.validate(data)
    if issues:
        logger.info("Document %s has %d numbering issues", document_id, len(issues))
    return ParseResult(tree=tree, data=data, issues=issues)


def parse_file(
    path: Path,
    *,
    split_mode: SplitMode | str = SplitMode.SLASH,
    attach_mode: AttachMode | str = AttachMode.SHALLOWEST,
) -> ParseResult:
    """Decode *path* with the matching loader and parse it.

    Raises:
        LoaderError: If the file is missing, unsupported or undecodable.
    """
    loaded = LoaderRegistry.load(path)
    for warning in loaded.warnings:
        logger.warning("%s: %s", path.name, warning)
    result = parse_text(
        loaded.text,
        document_id=path.stem,
        split_mode=split_mode,
        attach_mode=attach_mode,
    )
    result.source = loaded
    return result


def export_result(
    result: ParseResult,
    out_dir: Path,
    formats: list[str] | tuple[str, ...] = DEFAULT_FORMATS,
    sql_dialect: str = "sqlite",
) -> dict[str, Path]:
    """Write *result* in each of *formats* under *out_dir*.

    CSV output goes to ``<out_dir>/<document_id>_csv/``; every other format
    to a single ``<out_dir>/<document_id>.<ext>`` file.

    Returns:
        Mapping of format name to the written path.

    Raises:
        ExportError: If a format is not registered, or the document id
            would place output outside *out_dir*.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    base = out_dir.resolve()
    written: dict[str, Path] = {}
    for fmt in formats:
        options = {"dialect": sql_dialect} if fmt == "sql" else {}
        if fmt == "csv":
            target = out_dir / f"{result.document_id}_csv"
        else:
            target = out_dir / result.document_id
        if target.resolve().parent != base:
            raise ExportError(
                f"Document id {result.document_id!r} resolves outside {out_dir}"
            )
        written[fmt] = ExporterRegistry.export(result.data, target, fmt, **options)

    logger.info(
        "Exported %s to %s (%s)",
        result.document_id,
        out_dir,
        ", ".join(sorted(written)),
    )
    return written
