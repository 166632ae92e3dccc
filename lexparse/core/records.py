"""
Flat record contract consumed by exporters, SQL generation and the API.

Each recognized heading becomes one ``LevelRecord``. Records are grouped per
level in ``ParsedData``, preserving source document order within each list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from lexparse.core.levels import ABSENT_ID, LEVEL_ORDER, Level, ancestors_of

# Bump MINOR on additive changes to the serialized record shape.
SCHEMA_VERSION = "1.0"


@dataclass(frozen=True)
class LevelRecord:
    """A flattened heading with its full ancestor chain.

    Attributes:
        level: Structural level of the heading.
        number: Declared identifier parsed from the heading text.
        name_ru: Primary (Russian) name.
        name_kz: Secondary (Kazakh) name, empty when absent.
        ancestors: Declared ids of the ancestors open when the heading was
            read, keyed by level, shallowest first. ``ABSENT_ID`` marks a
            level with no open heading.
        uid: Surrogate identity, unique within one parse.
        parent_uid: Surrogate identity of the nearest open ancestor.
    """

    level: Level
    number: int
    name_ru: str
    name_kz: str = ""
    ancestors: Mapping[Level, int] = field(default_factory=dict)
    uid: int = 0
    parent_uid: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "ancestors", MappingProxyType(dict(self.ancestors)))

    def __hash__(self) -> int:
        return hash((self.level, self.number, self.uid, self.chain))

    def ancestor_id(self, level: Level) -> int:
        """Declared id of the ancestor at *level*, or ``ABSENT_ID``."""
        return self.ancestors.get(level, ABSENT_ID)

    @property
    def chain(self) -> tuple[int, ...]:
        """Ancestor ids followed by the own number, shallowest first."""
        return tuple(self.ancestor_id(a) for a in ancestors_of(self.level)) + (self.number,)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"id": self.number}
        for ancestor in reversed(ancestors_of(self.level)):
            result[ancestor.parent_field] = self.ancestor_id(ancestor)
        result["name_ru"] = self.name_ru
        result["name_kz"] = self.name_kz
        result["uid"] = self.uid
        result["parent_uid"] = self.parent_uid
        return result

    def to_row(self) -> list[Any]:
        """Tabular row: ancestor numbers, own number, NameRu, NameKz."""
        return [*self.chain, self.name_ru, self.name_kz]

    @classmethod
    def from_dict(cls, level: Level, data: dict[str, Any]) -> LevelRecord:
        return cls(
            level=level,
            number=int(data["id"]),
            name_ru=data.get("name_ru", ""),
            name_kz=data.get("name_kz", ""),
            ancestors={
                a: int(data.get(a.parent_field, ABSENT_ID)) for a in ancestors_of(level)
            },
            uid=int(data.get("uid", 0)),
            parent_uid=data.get("parent_uid"),
        )


def columns_for(level: Level) -> list[str]:
    """Tabular column names for *level* in fixed order.

    Example: ``Level.SECTION`` -> ``["PartNumber", "SectionNumber",
    "NameRu", "NameKz"]``.
    """
    return [a.number_column for a in ancestors_of(level)] + [
        level.number_column,
        "NameRu",
        "NameKz",
    ]


@dataclass
class ParsedData:
    """Seven ordered record lists, one per level."""

    parts: list[LevelRecord] = field(default_factory=list)
    sections: list[LevelRecord] = field(default_factory=list)
    chapters: list[LevelRecord] = field(default_factory=list)
    paragraphs: list[LevelRecord] = field(default_factory=list)
    articles: list[LevelRecord] = field(default_factory=list)
    clauses: list[LevelRecord] = field(default_factory=list)
    sub_clauses: list[LevelRecord] = field(default_factory=list)

    def records(self, level: Level) -> list[LevelRecord]:
        """Return the (mutable) record list for *level*."""
        return getattr(self, level.key)

    def append(self, record: LevelRecord) -> None:
        self.records(record.level).append(record)

    def iter_levels(self) -> Iterator[tuple[Level, list[LevelRecord]]]:
        """Yield ``(level, records)`` pairs in insertion order Part..SubClause."""
        for level in LEVEL_ORDER:
            yield level, self.records(level)

    @property
    def total(self) -> int:
        return sum(len(records) for _, records in self.iter_levels())

    @property
    def is_empty(self) -> bool:
        """True when no heading was recognized."""
        return self.total == 0

    def counts(self) -> dict[str, int]:
        return {level.key: len(records) for level, records in self.iter_levels()}

    def to_dict(self) -> dict[str, Any]:
        return {
            level.key: [r.to_dict() for r in records]
            for level, records in self.iter_levels()
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParsedData:
        parsed = cls()
        for level in LEVEL_ORDER:
            for item in data.get(level.key, []):
                parsed.append(LevelRecord.from_dict(level, item))
        return parsed
