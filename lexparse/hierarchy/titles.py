"""
Bilingual title splitting.

Headings carry a Russian name and, usually, a Kazakh one. Deployments write
the pair either as ``"RU / KZ"`` or as ``"RU (KZ)"``; the convention is a
strategy parameter of one splitter.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SplitMode(str, Enum):
    """Delimiter convention between the primary and secondary names."""

    SLASH = "slash"
    PARENTHESIS = "parenthesis"


@dataclass(frozen=True)
class TitleSplitter:
    """Split raw heading titles into ``(name_ru, name_kz)``."""

    mode: SplitMode = SplitMode.SLASH

    @property
    def delimiter(self) -> str:
        return "/" if self.mode is SplitMode.SLASH else "("

    def split(self, title: str) -> tuple[str, str]:
        """Split on the first delimiter occurrence.

        Examples:
            ``"Общие положения / Жалпы ережелер"`` ->
            ``("Общие положения", "Жалпы ережелер")``;
            ``"Общие положения"`` -> ``("Общие положения", "")``.
        """
        primary, found, secondary = title.partition(self.delimiter)
        if not found:
            return title.strip(), ""

        secondary = secondary.strip()
        if self.mode is SplitMode.PARENTHESIS and secondary.endswith(")"):
            # an unterminated "(KZ" is still accepted
            secondary = secondary[:-1].rstrip()
        return primary.strip(), secondary
