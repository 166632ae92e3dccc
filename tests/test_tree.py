"""Tests for DocumentTree, DocumentNode and the Flattener."""

import pytest

from lexparse.core.levels import Level
from lexparse.hierarchy.builder import AttachMode, TreeBuilder
from lexparse.hierarchy.flattener import Flattener
from lexparse.hierarchy.tree import DocumentNode


class TestDocumentNode:
    def test_root(self):
        root = DocumentNode(level=None)
        assert root.is_root
        assert root.is_leaf
        assert root.depth == 0
        assert root.missing_ancestors == []

    def test_add_child_sets_parent(self):
        root = DocumentNode(level=None)
        child = DocumentNode(level=Level.PART, declared_id=1)
        root.add_child(child)
        assert child.parent is root
        assert child.depth == 1
        assert not root.is_leaf

    def test_missing_ancestors(self):
        node = DocumentNode(
            level=Level.CHAPTER,
            declared_id=3,
            ancestor_ids={Level.PART: 1, Level.SECTION: 0},
        )
        assert node.missing_ancestors == [Level.SECTION]

    def test_iter_descendants_is_preorder(self):
        root = DocumentNode(level=None)
        a = DocumentNode(level=Level.SECTION, declared_id=1)
        a1 = DocumentNode(level=Level.CHAPTER, declared_id=1)
        b = DocumentNode(level=Level.SECTION, declared_id=2)
        root.add_child(a)
        a.add_child(a1)
        root.add_child(b)
        assert list(root.iter_descendants()) == [a, a1, b]
        assert root.descendant_count == 3

    def test_to_dict(self):
        node = DocumentNode(
            level=Level.ARTICLE,
            declared_id=4,
            name_ru="Статья",
            ancestor_ids={Level.CHAPTER: 2},
            uid=5,
        )
        result = node.to_dict(include_children=False)
        assert result["level"] == "article"
        assert result["id"] == 4
        assert result["ancestor_ids"] == {"chapter": 2}
        assert "children" not in result


class TestDocumentTree:
    def test_statistics(self, sample_tree):
        stats = sample_tree.get_statistics()
        assert stats["total_nodes"] == 15
        assert stats["top_level_nodes"] == 1
        assert stats["level_distribution"] == {
            "part": 1,
            "section": 2,
            "chapter": 3,
            "paragraph": 1,
            "article": 4,
            "clause": 2,
            "subclause": 2,
        }

    def test_get_node_by_uid(self, sample_tree):
        node = sample_tree.get_node_by_uid(3)
        assert node.level is Level.CHAPTER
        assert sample_tree.get_node_by_uid(999) is None

    def test_render_nearest(self, sample_text):
        tree = TreeBuilder(attach_mode=AttachMode.NEAREST).build(sample_text)
        lines = tree.render().splitlines()
        assert lines[0] == "Part 1. Общая часть / Жалпы бөлім"
        assert lines[1] == "  Section 1. Общие положения / Жалпы ережелер"
        assert lines[5] == "          SubClause 1. первый подпункт / бірінші тармақша"
        assert len(lines) == 15

    def test_render_max_depth(self, sample_text):
        tree = TreeBuilder(attach_mode=AttachMode.NEAREST).build(sample_text)
        assert tree.render(max_depth=2).splitlines() == [
            "Part 1. Общая часть / Жалпы бөлім",
            "  Section 1. Общие положения / Жалпы ережелер",
            "  Section 2. Право собственности / Меншік құқығы",
        ]

    def test_to_dict(self, sample_tree):
        result = sample_tree.to_dict()
        assert result["document_id"] == "sample"
        assert result["diagnostics"]["headings"] == 15
        assert result["root"]["level"] is None
        assert len(result["root"]["children"]) == 1


class TestFlattener:
    def test_counts(self, sample_data):
        assert sample_data.counts() == {
            "parts": 1,
            "sections": 2,
            "chapters": 3,
            "paragraphs": 1,
            "articles": 4,
            "clauses": 2,
            "sub_clauses": 2,
        }

    def test_document_order_within_level(self, sample_data):
        assert [r.number for r in sample_data.articles] == [1, 2, 1, 3]
        assert [r.number for r in sample_data.sub_clauses] == [1, 2]

    def test_records_carry_full_chain(self, sample_data):
        sub_clause = sample_data.sub_clauses[1]
        assert sub_clause.chain == (1, 1, 1, 0, 1, 1, 2)
        assert sub_clause.name_ru == "второй подпункт"

    def test_root_has_no_record(self):
        with pytest.raises(ValueError):
            Flattener.to_record(DocumentNode(level=None))
