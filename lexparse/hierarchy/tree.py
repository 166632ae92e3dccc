"""
Document tree data structures.

The tree produced by one parse: a sentinel root, one ``DocumentNode`` per
recognized heading, and the diagnostics gathered while scanning.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from lexparse.core.errors import MalformedHeading
from lexparse.core.levels import ABSENT_ID, Level, ancestors_of


@dataclass(eq=False)
class DocumentNode:
    """
    One heading occurrence in the document.

    ``ancestor_ids`` is a read-only snapshot of the declared ids that were
    open when the heading was read; it never follows later changes to the
    tree. ``declared_id`` is only unique among siblings of one scope, use
    ``uid`` when a globally unique key is needed.
    """

    level: Level | None
    declared_id: int = 0
    name_ru: str = ""
    name_kz: str = ""
    ancestor_ids: Mapping[Level, int] = field(default_factory=dict)
    uid: int = 0
    parent_uid: int | None = None
    line_number: int | None = None
    heading: str | None = None
    children: list[DocumentNode] = field(default_factory=list)
    parent: DocumentNode | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.ancestor_ids = MappingProxyType(dict(self.ancestor_ids))

    @property
    def is_root(self) -> bool:
        return self.level is None

    def add_child(self, child: DocumentNode) -> None:
        """Attach *child* as the last child of this node."""
        child.parent = self
        self.children.append(child)

    def ancestor_id(self, level: Level) -> int:
        return self.ancestor_ids.get(level, ABSENT_ID)

    @property
    def missing_ancestors(self) -> list[Level]:
        """Required ancestor levels that had no open heading."""
        if self.level is None:
            return []
        return [a for a in ancestors_of(self.level) if self.ancestor_id(a) == ABSENT_ID]

    @property
    def depth(self) -> int:
        """Depth in the tree (root = 0)."""
        depth = 0
        current = self.parent
        while current:
            depth += 1
            current = current.parent
        return depth

    @property
    def is_leaf(self) -> bool:
        return len(self.children) == 0

    def iter_descendants(self) -> Iterator[DocumentNode]:
        """Yield all descendants in pre-order, children in insertion order."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    @property
    def descendant_count(self) -> int:
        return sum(1 for _ in self.iter_descendants())

    @property
    def hierarchy_path(self) -> str:
        """
        Path of headings from the top of the tree to this node.

        Example: "Part 1 > Chapter 2 > Article 7"
        """
        parts = []
        current: DocumentNode | None = self
        while current and current.level is not None:
            parts.insert(0, f"{current.level.label} {current.declared_id}")
            current = current.parent
        return " > ".join(parts)

    def to_dict(self, include_children: bool = True) -> dict[str, Any]:
        result: dict[str, Any] = {
            "uid": self.uid,
            "level": self.level.value if self.level else None,
            "id": self.declared_id,
            "name_ru": self.name_ru,
            "name_kz": self.name_kz,
            "ancestor_ids": {a.value: i for a, i in self.ancestor_ids.items()},
            "parent_uid": self.parent_uid,
            "line_number": self.line_number,
        }
        if include_children:
            result["children"] = [c.to_dict(True) for c in self.children]
        return result

    def __repr__(self) -> str:
        label = self.level.label if self.level else "ROOT"
        return (
            f"<DocumentNode {label} {self.declared_id} "
            f"'{self.name_ru[:40]}' children={len(self.children)}>"
        )


@dataclass
class ParseDiagnostics:
    """Counters and recoverable problems collected during one scan."""

    lines_total: int = 0
    lines_blank: int = 0
    body_lines: int = 0
    headings: int = 0
    missing_ancestors: int = 0
    malformed: list[MalformedHeading] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when the document contained no recognizable heading."""
        return self.headings == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "lines_total": self.lines_total,
            "lines_blank": self.lines_blank,
            "body_lines": self.body_lines,
            "headings": self.headings,
            "missing_ancestors": self.missing_ancestors,
            "malformed": [m.to_dict() for m in self.malformed],
            "empty": self.is_empty,
        }


@dataclass
class DocumentTree:
    """A parsed document: root node plus scan diagnostics."""

    root: DocumentNode
    document_id: str
    diagnostics: ParseDiagnostics = field(default_factory=ParseDiagnostics)
    metadata: dict[str, Any] = field(default_factory=dict)

    def iter_nodes(self) -> Iterator[DocumentNode]:
        """All heading nodes in pre-order (document order)."""
        return self.root.iter_descendants()

    @property
    def total_nodes(self) -> int:
        return self.root.descendant_count

    @property
    def max_depth(self) -> int:
        return max((node.depth for node in self.iter_nodes()), default=0)

    def nodes_at_level(self, level: Level) -> list[DocumentNode]:
        return [node for node in self.iter_nodes() if node.level is level]

    def get_node_by_uid(self, uid: int) -> DocumentNode | None:
        for node in self.iter_nodes():
            if node.uid == uid:
                return node
        return None

    def get_statistics(self) -> dict[str, Any]:
        levels = Counter(node.level.value for node in self.iter_nodes() if node.level)
        return {
            "total_nodes": self.total_nodes,
            "max_depth": self.max_depth,
            "top_level_nodes": len(self.root.children),
            "level_distribution": dict(levels),
        }

    def render(self, max_depth: int | None = None) -> str:
        """Indented text outline of the tree, one heading per line."""
        lines = []
        stack = [(child, 0) for child in reversed(self.root.children)]
        while stack:
            node, indent = stack.pop()
            if max_depth is not None and indent >= max_depth:
                continue
            label = node.level.label if node.level else "ROOT"
            title = node.name_ru if not node.name_kz else f"{node.name_ru} / {node.name_kz}"
            lines.append(f"{'  ' * indent}{label} {node.declared_id}. {title}")
            stack.extend((child, indent + 1) for child in reversed(node.children))
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "document_id": self.document_id,
            "metadata": self.metadata,
            "statistics": self.get_statistics(),
            "diagnostics": self.diagnostics.to_dict(),
            "root": self.root.to_dict(include_children=True),
        }

    def __repr__(self) -> str:
        return f"<DocumentTree doc={self.document_id} nodes={self.total_nodes}>"
