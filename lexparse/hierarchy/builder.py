"""
Document tree builder.

Turns flat legal text into a ``DocumentTree`` in one forward pass over its
lines.
"""

from __future__ import annotations

import logging
from enum import Enum

from lexparse.core.levels import ABSENT_ID, Level, ancestors_of
from lexparse.hierarchy.classifier import HeadingMatch, LineClassifier
from lexparse.hierarchy.context import ContextTracker
from lexparse.hierarchy.titles import SplitMode, TitleSplitter
from lexparse.hierarchy.tree import DocumentNode, DocumentTree, ParseDiagnostics

logger = logging.getLogger(__name__)


class AttachMode(str, Enum):
    """Which open ancestor becomes the tree parent of a new node."""

    SHALLOWEST = "shallowest"
    NEAREST = "nearest"


class TreeBuilder:
    """
    Builds document trees from text.

    For every heading line the builder snapshots the declared ids of the
    open ancestors, attaches the new node under an open ancestor (or the
    root when none is open), and opens it in the context tracker, which
    closes all deeper levels.

    A builder may be reused for many documents, but not from several
    threads at once: ``build`` keeps its tracker and root on the instance
    for the duration of one pass. Use one builder per concurrent parse.
    """

    def __init__(
        self,
        classifier: LineClassifier | None = None,
        splitter: TitleSplitter | None = None,
        attach_mode: AttachMode = AttachMode.SHALLOWEST,
    ) -> None:
        self.classifier = classifier or LineClassifier()
        self.splitter = splitter or TitleSplitter()
        self.attach_mode = AttachMode(attach_mode)
        self.ancestors_of = ancestors_of
        self._tracker = ContextTracker()
        self._root = DocumentNode(level=None)
        self._diagnostics = ParseDiagnostics()
        self._next_uid = 1

    def build(self, text: str, document_id: str = "doc") -> DocumentTree:
        """Parse *text* into a tree.

        Never raises on odd input: unparsable headings are skipped and
        recorded in the diagnostics, missing ancestors are stored as
        ``ABSENT_ID``.

        Args:
            text: Whole document, already decoded.
            document_id: Identifier stored on the tree.

        Returns:
            DocumentTree whose root owns every top-level heading.
        """
        self._reset()

        # only "\n" ends a line; strip() drops a trailing "\r"
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()

        for line_number, raw_line in enumerate(lines, start=1):
            self._diagnostics.lines_total += 1
            line = raw_line.strip()
            if not line:
                self._diagnostics.lines_blank += 1
                continue

            classified = self.classifier.classify(line, line_number=line_number)
            self._diagnostics.malformed.extend(classified.malformed)
            if not classified.is_heading:
                self._diagnostics.body_lines += 1
                continue

            for match in classified.matches:
                self._add_heading(match, line, line_number)

        tree = DocumentTree(
            root=self._root,
            document_id=document_id,
            diagnostics=self._diagnostics,
            metadata={
                "title_split_mode": self.splitter.mode.value,
                "attach_mode": self.attach_mode.value,
            },
        )

        if self._diagnostics.is_empty:
            logger.info("No headings recognized in document %s", document_id)
        else:
            logger.info(
                "Parsed document %s: %d headings, %d malformed, %d missing ancestors",
                document_id,
                self._diagnostics.headings,
                len(self._diagnostics.malformed),
                self._diagnostics.missing_ancestors,
            )

        self._tracker.clear()
        return tree

    def _reset(self) -> None:
        self._tracker = ContextTracker()
        self._root = DocumentNode(level=None)
        self._diagnostics = ParseDiagnostics()
        self._next_uid = 1

    def _add_heading(self, match: HeadingMatch, line: str, line_number: int) -> DocumentNode:
        level = match.level
        ancestor_ids: dict[Level, int] = {}
        open_ancestors: list[DocumentNode] = []

        for ancestor_level in self.ancestors_of(level):
            ancestor = self._tracker.lookup(ancestor_level)
            if ancestor is None:
                ancestor_ids[ancestor_level] = ABSENT_ID
                self._diagnostics.missing_ancestors += 1
                logger.debug(
                    "Line %d: %s %d has no open %s",
                    line_number,
                    level.label,
                    match.declared_id,
                    ancestor_level.label,
                )
            else:
                ancestor_ids[ancestor_level] = ancestor.declared_id
                open_ancestors.append(ancestor)

        name_ru, name_kz = self.splitter.split(match.title)
        node = DocumentNode(
            level=level,
            declared_id=match.declared_id,
            name_ru=name_ru,
            name_kz=name_kz,
            ancestor_ids=ancestor_ids,
            uid=self._next_uid,
            parent_uid=open_ancestors[-1].uid if open_ancestors else None,
            line_number=line_number,
            heading=line,
        )
        self._next_uid += 1

        if not open_ancestors:
            parent = self._root
        elif self.attach_mode is AttachMode.NEAREST:
            parent = open_ancestors[-1]
        else:
            parent = open_ancestors[0]
        parent.add_child(node)

        self._tracker.open(level, node)
        self._diagnostics.headings += 1
        logger.debug("Line %d: %s %d opened", line_number, level.label, match.declared_id)
        return node


def build_tree(
    text: str,
    document_id: str = "doc",
    split_mode: SplitMode = SplitMode.SLASH,
    attach_mode: AttachMode = AttachMode.SHALLOWEST,
) -> DocumentTree:
    """Parse *text* with a fresh builder."""
    builder = TreeBuilder(
        splitter=TitleSplitter(SplitMode(split_mode)),
        attach_mode=attach_mode,
    )
    return builder.build(text, document_id=document_id)
