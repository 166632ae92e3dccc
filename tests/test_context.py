"""Tests for ContextTracker."""

from lexparse.core.levels import Level
from lexparse.hierarchy.context import ContextTracker
from lexparse.hierarchy.tree import DocumentNode


def _node(level: Level, declared_id: int = 1) -> DocumentNode:
    return DocumentNode(level=level, declared_id=declared_id)


class TestContextTracker:
    def test_empty(self):
        tracker = ContextTracker()
        assert len(tracker) == 0
        assert tracker.lookup(Level.PART) is None

    def test_open_and_lookup(self):
        tracker = ContextTracker()
        part = _node(Level.PART)
        tracker.open(Level.PART, part)
        assert tracker.lookup(Level.PART) is part

    def test_open_closes_deeper_levels(self):
        tracker = ContextTracker()
        for level in (Level.PART, Level.SECTION, Level.CHAPTER, Level.ARTICLE, Level.CLAUSE):
            tracker.open(level, _node(level))

        new_section = _node(Level.SECTION, 2)
        tracker.open(Level.SECTION, new_section)

        assert tracker.open_levels() == [Level.PART, Level.SECTION]
        assert tracker.lookup(Level.SECTION) is new_section
        assert tracker.lookup(Level.CHAPTER) is None
        assert tracker.lookup(Level.CLAUSE) is None

    def test_open_same_level_replaces(self):
        tracker = ContextTracker()
        first, second = _node(Level.ARTICLE, 1), _node(Level.ARTICLE, 2)
        tracker.open(Level.ARTICLE, first)
        tracker.open(Level.CLAUSE, _node(Level.CLAUSE))
        tracker.open(Level.ARTICLE, second)
        assert tracker.lookup(Level.ARTICLE) is second
        assert tracker.open_levels() == [Level.ARTICLE]

    def test_open_deeper_keeps_shallower(self):
        tracker = ContextTracker()
        tracker.open(Level.CHAPTER, _node(Level.CHAPTER))
        tracker.open(Level.SUBCLAUSE, _node(Level.SUBCLAUSE))
        assert tracker.open_levels() == [Level.CHAPTER, Level.SUBCLAUSE]

    def test_clear(self):
        tracker = ContextTracker()
        tracker.open(Level.PART, _node(Level.PART))
        tracker.clear()
        assert len(tracker) == 0
