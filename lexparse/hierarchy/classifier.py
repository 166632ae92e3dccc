"""
Heading line classification.

Each level has one heading rule: a marker (a keyword such as ``Статья`` or a
numbering convention such as ``N)``), an identifier token and a title. The
classifier tests every rule against the same line, in level order, without
stopping at the first match.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from lexparse.core.errors import MalformedHeading
from lexparse.core.levels import Level

logger = logging.getLogger(__name__)

_LATIN_ALPHABET = "abcdefghijklmnopqrstuvwxyz"
_CYRILLIC_ALPHABET = "абвгдеёжзийклмнопрстуфхцчшщъыьэюя"
_ASCII_DIGITS = re.compile(r"[0-9]+")


def parse_number(token: str) -> int:
    """Parse a plain non-negative decimal identifier.

    Raises:
        ValueError: If *token* is not made of ASCII digits only.
    """
    if not _ASCII_DIGITS.fullmatch(token):
        raise ValueError(f"not a decimal identifier: {token!r}")
    return int(token)


def letter_ordinal(token: str) -> int:
    """Map a single sub-clause letter to its 1-based alphabet position.

    Latin and Russian alphabets are supported, case-insensitively:
    ``a`` -> 1, ``z`` -> 26, ``а`` -> 1, ``я`` -> 33.

    Raises:
        ValueError: If *token* is not a single known letter.
    """
    letter = token.lower()
    if len(letter) != 1:
        raise ValueError(f"not a single letter: {token!r}")
    for alphabet in (_LATIN_ALPHABET, _CYRILLIC_ALPHABET):
        position = alphabet.find(letter)
        if position >= 0:
            return position + 1
    raise ValueError(f"letter outside supported alphabets: {token!r}")


@dataclass(frozen=True)
class HeadingMatch:
    """A successful rule match on one line."""

    level: Level
    declared_id: int
    title: str


@dataclass(frozen=True)
class HeadingRule:
    """Recognizes the heading of one level.

    Attributes:
        level: Level produced on a match.
        pattern: Regex with ``ident`` and ``title`` named groups, applied
            with ``match`` to a trimmed line.
        parse_id: Converts the ``ident`` token to an int; raises
            ``ValueError`` on tokens it cannot convert.
    """

    level: Level
    pattern: re.Pattern[str]
    parse_id: Callable[[str], int] = parse_number

    def match(self, line: str) -> HeadingMatch | None:
        """Apply the rule to *line*.

        Returns:
            The match, or None when the marker is not present.

        Raises:
            MalformedHeading: The marker is present but the identifier
                token cannot be parsed.
        """
        found = self.pattern.match(line)
        if found is None:
            return None
        token = found.group("ident")
        try:
            declared_id = self.parse_id(token)
        except ValueError as exc:
            raise MalformedHeading(self.level, token, line) from exc
        return HeadingMatch(
            level=self.level,
            declared_id=declared_id,
            title=found.group("title").strip(),
        )


def _keyword_rule(level: Level, keyword: str) -> HeadingRule:
    return HeadingRule(
        level=level,
        pattern=re.compile(
            rf"^{keyword}\s+(?P<ident>[^\s.]+)[.\s]+(?P<title>.+)$"
        ),
    )


DEFAULT_RULES: tuple[HeadingRule, ...] = (
    _keyword_rule(Level.PART, "ЧАСТЬ"),
    _keyword_rule(Level.SECTION, "РАЗДЕЛ"),
    _keyword_rule(Level.CHAPTER, "Глава"),
    _keyword_rule(Level.PARAGRAPH, "Параграф"),
    _keyword_rule(Level.ARTICLE, "Статья"),
    HeadingRule(
        level=Level.CLAUSE,
        pattern=re.compile(r"^(?P<ident>[0-9]+)\)\s+(?P<title>.+)$"),
    ),
    HeadingRule(
        level=Level.SUBCLAUSE,
        pattern=re.compile(r"^(?P<ident>[^\W\d_])\)\s+(?P<title>.+)$"),
        parse_id=letter_ordinal,
    ),
)


@dataclass
class ClassifiedLine:
    """Everything the rules found on one line."""

    matches: list[HeadingMatch] = field(default_factory=list)
    malformed: list[MalformedHeading] = field(default_factory=list)

    @property
    def is_heading(self) -> bool:
        return bool(self.matches)


class LineClassifier:
    """Runs an ordered list of heading rules against single lines.

    Rules are independent: every rule is tried on every line and each
    one that matches contributes a ``HeadingMatch``. With the default
    rules the identifier grammars are disjoint, so at most one level
    matches in practice.
    """

    def __init__(self, rules: Sequence[HeadingRule] | None = None) -> None:
        self.rules: tuple[HeadingRule, ...] = tuple(rules or DEFAULT_RULES)

    def classify(self, line: str, line_number: int | None = None) -> ClassifiedLine:
        """Classify one trimmed, non-blank line.

        Args:
            line: The line text, already stripped.
            line_number: 1-based position in the source, for diagnostics.

        Returns:
            Matches and malformed headings, both in rule order.
        """
        result = ClassifiedLine()
        for rule in self.rules:
            try:
                found = rule.match(line)
            except MalformedHeading as exc:
                exc.line_number = line_number
                logger.warning("Skipping malformed heading at line %s: %s", line_number, exc)
                result.malformed.append(exc)
                continue
            if found is not None:
                result.matches.append(found)
        return result
