"""
Structural levels of a legal code.

A code is organised into seven fixed ranks, from the shallowest (Part) to
the deepest (SubClause). This module holds the static lookup tables the
parser relies on: the total order of levels, the ancestors each level
records, and the descendants whose open context a new heading closes.
"""

from __future__ import annotations

from enum import Enum

# Ancestor reference recorded when no heading of that level is open.
ABSENT_ID = 0


class Level(Enum):
    """The seven hierarchy ranks, declared shallowest first."""

    PART = "part"
    SECTION = "section"
    CHAPTER = "chapter"
    PARAGRAPH = "paragraph"
    ARTICLE = "article"
    CLAUSE = "clause"
    SUBCLAUSE = "subclause"

    @property
    def depth(self) -> int:
        """Zero-based rank (PART = 0, SUBCLAUSE = 6)."""
        return LEVEL_ORDER.index(self)

    @property
    def label(self) -> str:
        """Human-readable name, e.g. ``"SubClause"``."""
        return _LABELS[self]

    @property
    def key(self) -> str:
        """Collection key used in serialized output, e.g. ``"sub_clauses"``."""
        return _KEYS[self]

    @property
    def table(self) -> str:
        """Table and sheet name, e.g. ``"SubClauses"``."""
        return f"{self.label}s"

    @property
    def number_column(self) -> str:
        """Column holding this level's declared number in tabular output."""
        return f"{self.label}Number"

    @property
    def parent_field(self) -> str:
        """Record field holding this level's id when it is an ancestor."""
        return f"parent_{self.value}_id"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.depth < other.depth


LEVEL_ORDER: tuple[Level, ...] = (
    Level.PART,
    Level.SECTION,
    Level.CHAPTER,
    Level.PARAGRAPH,
    Level.ARTICLE,
    Level.CLAUSE,
    Level.SUBCLAUSE,
)

_LABELS: dict[Level, str] = {
    Level.PART: "Part",
    Level.SECTION: "Section",
    Level.CHAPTER: "Chapter",
    Level.PARAGRAPH: "Paragraph",
    Level.ARTICLE: "Article",
    Level.CLAUSE: "Clause",
    Level.SUBCLAUSE: "SubClause",
}

_KEYS: dict[Level, str] = {
    Level.PART: "parts",
    Level.SECTION: "sections",
    Level.CHAPTER: "chapters",
    Level.PARAGRAPH: "paragraphs",
    Level.ARTICLE: "articles",
    Level.CLAUSE: "clauses",
    Level.SUBCLAUSE: "sub_clauses",
}

_ANCESTORS: dict[Level, tuple[Level, ...]] = {
    level: LEVEL_ORDER[:i] for i, level in enumerate(LEVEL_ORDER)
}

_DESCENDANTS: dict[Level, tuple[Level, ...]] = {
    level: LEVEL_ORDER[i + 1:] for i, level in enumerate(LEVEL_ORDER)
}


def ancestors_of(level: Level) -> tuple[Level, ...]:
    """Return the levels whose open heading a node of *level* records.

    Args:
        level: Level of the node being created.

    Returns:
        Ancestor levels, shallowest first. Empty for PART.
    """
    return _ANCESTORS[level]


def descendants_of(level: Level) -> tuple[Level, ...]:
    """Return the levels closed when a heading of *level* opens.

    Args:
        level: Level of the heading being opened.

    Returns:
        Deeper levels, shallowest first. Empty for SUBCLAUSE.
    """
    return _DESCENDANTS[level]


def level_from_key(value: str) -> Level:
    """Look up a level by its enum value, label or collection key.

    Raises:
        ValueError: If *value* names no level.
    """
    needle = value.strip().lower()
    for level in LEVEL_ORDER:
        if needle in (level.value, level.label.lower(), level.key, level.table.lower()):
            return level
    raise ValueError(f"Unknown level: {value!r}")
