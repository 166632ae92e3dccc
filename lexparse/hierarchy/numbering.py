"""
Declared numbering validation.

Legal codes number their headings within a parent scope: two Chapters may
each contain an "Article 1". This module checks the numbering inside every
scope for gaps and duplicates, and reports numbers shared between scopes so
that consumers do not treat declared ids as global keys.
"""

from __future__ import annotations

from collections import defaultdict

from lexparse.core.levels import Level
from lexparse.core.records import LevelRecord, ParsedData


def _scope_label(record: LevelRecord) -> str:
    chain = record.chain[:-1]
    if not chain:
        return "document"
    return "/".join(str(n) for n in chain)


class NumberingValidator:
    """Validates declared numbering per level and ancestor scope."""

    @staticmethod
    def validate(data: ParsedData) -> list[dict[str, str]]:
        """Check numbering for gaps, duplicates and cross-scope reuse.

        Args:
            data: Flattened parse output.

        Returns:
            List of issue dictionaries with 'type', 'level' and 'message'
            keys, in level order.
        """
        issues: list[dict[str, str]] = []
        for level, records in data.iter_levels():
            scopes: dict[tuple[int, ...], list[LevelRecord]] = defaultdict(list)
            for record in records:
                scopes[record.chain[:-1]].append(record)

            for members in scopes.values():
                NumberingValidator._check_duplicates(level, members, issues)
                NumberingValidator._check_gaps(level, members, issues)

            NumberingValidator._check_shared(level, scopes, issues)
        return issues

    @staticmethod
    def _check_duplicates(
        level: Level, members: list[LevelRecord], issues: list[dict[str, str]]
    ) -> None:
        seen: set[int] = set()
        for record in members:
            if record.number in seen:
                issues.append({
                    "type": "duplicate_number",
                    "level": level.value,
                    "message": (
                        f"Duplicate {level.label} number {record.number} "
                        f"in scope {_scope_label(record)}"
                    ),
                })
            seen.add(record.number)

    @staticmethod
    def _check_gaps(
        level: Level, members: list[LevelRecord], issues: list[dict[str, str]]
    ) -> None:
        for previous, current in zip(members, members[1:]):
            expected = previous.number + 1
            if current.number > expected:
                issues.append({
                    "type": "numbering_gap",
                    "level": level.value,
                    "message": (
                        f"Gap in {level.label} numbering in scope "
                        f"{_scope_label(current)}: expected {expected} "
                        f"after {previous.number}, found {current.number}"
                    ),
                })

    @staticmethod
    def _check_shared(
        level: Level,
        scopes: dict[tuple[int, ...], list[LevelRecord]],
        issues: list[dict[str, str]],
    ) -> None:
        owners: dict[int, set[tuple[int, ...]]] = defaultdict(set)
        for scope, members in scopes.items():
            for record in members:
                owners[record.number].add(scope)

        for number in sorted(owners):
            if len(owners[number]) > 1:
                issues.append({
                    "type": "shared_number",
                    "level": level.value,
                    "message": (
                        f"{level.label} number {number} is declared in "
                        f"{len(owners[number])} different scopes"
                    ),
                })
