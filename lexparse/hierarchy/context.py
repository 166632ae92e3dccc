"""Open-heading context kept while a document is scanned."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lexparse.core.levels import LEVEL_ORDER, Level, descendants_of

if TYPE_CHECKING:
    from lexparse.hierarchy.tree import DocumentNode


class ContextTracker:
    """
    Map from level to the heading currently open at that level.

    Opening a heading closes every deeper level unconditionally, so a new
    Section always ends the Chapter, Paragraph, ... that were open before
    it. One tracker serves exactly one parse pass.
    """

    def __init__(self) -> None:
        self._open: dict[Level, DocumentNode] = {}

    def open(self, level: Level, node: DocumentNode) -> None:
        """Make *node* the open heading of *level* and close deeper levels."""
        self._open[level] = node
        for deeper in descendants_of(level):
            self._open.pop(deeper, None)

    def lookup(self, level: Level) -> DocumentNode | None:
        """Return the open heading of *level*, or None."""
        return self._open.get(level)

    def open_levels(self) -> list[Level]:
        """Levels with an open heading, shallowest first."""
        return [level for level in LEVEL_ORDER if level in self._open]

    def clear(self) -> None:
        self._open.clear()

    def __len__(self) -> int:
        return len(self._open)
