"""Flatten a document tree into per-level record lists."""

from __future__ import annotations

from lexparse.core.levels import ancestors_of
from lexparse.core.records import LevelRecord, ParsedData
from lexparse.hierarchy.tree import DocumentNode, DocumentTree


class Flattener:
    """Pre-order traversal producing one ``LevelRecord`` per heading.

    Within every level's list, records keep the order in which their
    headings appeared in the source.
    """

    @staticmethod
    def to_record(node: DocumentNode) -> LevelRecord:
        if node.level is None:
            raise ValueError("The root node has no record")
        return LevelRecord(
            level=node.level,
            number=node.declared_id,
            name_ru=node.name_ru,
            name_kz=node.name_kz,
            ancestors={a: node.ancestor_id(a) for a in ancestors_of(node.level)},
            uid=node.uid,
            parent_uid=node.parent_uid,
        )

    @classmethod
    def flatten(cls, tree: DocumentTree) -> ParsedData:
        data = ParsedData()
        stack = list(reversed(tree.root.children))
        while stack:
            node = stack.pop()
            data.append(cls.to_record(node))
            stack.extend(reversed(node.children))
        return data
