"""
SQL statement generation for parsed codes.

Every level gets its own table. Rows are keyed by the surrogate ``uid`` of
their heading; declared numbers are kept as attributes alongside the
declared numbers of all ancestors. Each ancestor foreign key is resolved at
insert time by matching the ancestor's number chain against rows already
inserted, taking the latest one that precedes the child in the document.
"""

from __future__ import annotations

from dataclasses import dataclass

from lexparse.core.levels import ABSENT_ID, LEVEL_ORDER, Level, ancestors_of
from lexparse.core.records import LevelRecord, ParsedData


@dataclass(frozen=True)
class SQLDialect:
    """Dialect-specific bits of the generated SQL."""

    name: str
    text_type: str
    string_prefix: str = ""


DIALECTS: dict[str, SQLDialect] = {
    "sqlite": SQLDialect(name="sqlite", text_type="TEXT"),
    "mssql": SQLDialect(name="mssql", text_type="NVARCHAR(MAX)", string_prefix="N"),
}


def escape_sql_string(value: str) -> str:
    """Escape single quotes by doubling them."""
    return value.replace("'", "''")


def ancestor_key_column(level: Level) -> str:
    """Foreign key column referencing *level*'s table, e.g. ``PartId``."""
    return f"{level.label}Id"


class SQLGenerator:
    """Builds schema, clearing and insert statements for one dialect."""

    def __init__(self, dialect: str = "sqlite") -> None:
        try:
            self.dialect = DIALECTS[dialect]
        except KeyError:
            available = ", ".join(DIALECTS)
            raise ValueError(f"Unknown SQL dialect: {dialect}. Available: {available}") from None

    def literal(self, value: str) -> str:
        return f"{self.dialect.string_prefix}'{escape_sql_string(value)}'"

    def schema_statements(self) -> list[str]:
        """CREATE TABLE statements, shallowest level first."""
        statements = []
        for level in LEVEL_ORDER:
            columns = ["Id INTEGER PRIMARY KEY"]
            for ancestor in ancestors_of(level):
                columns.append(f"{ancestor.number_column} INTEGER NOT NULL DEFAULT {ABSENT_ID}")
                columns.append(
                    f"{ancestor_key_column(ancestor)} INTEGER "
                    f"REFERENCES {ancestor.table}(Id)"
                )
            columns.append("Number INTEGER NOT NULL")
            columns.append(f"NameRu {self.dialect.text_type} NOT NULL")
            columns.append(f"NameKz {self.dialect.text_type} NOT NULL")
            body = ",\n    ".join(columns)
            if self.dialect.name == "mssql":
                statements.append(
                    f"IF OBJECT_ID(N'{level.table}', N'U') IS NULL\n"
                    f"CREATE TABLE {level.table} (\n    {body}\n);"
                )
            else:
                statements.append(f"CREATE TABLE IF NOT EXISTS {level.table} (\n    {body}\n);")
        return statements

    def clear_statements(self) -> list[str]:
        """DELETE statements, deepest level first."""
        return [f"DELETE FROM {level.table};" for level in reversed(LEVEL_ORDER)]

    def insert_statement(self, record: LevelRecord) -> str:
        level = record.level
        columns = ["Id"]
        values = [str(record.uid)]
        for ancestor in ancestors_of(level):
            columns.append(ancestor.number_column)
            values.append(str(record.ancestor_id(ancestor)))
            columns.append(ancestor_key_column(ancestor))
            values.append(self._resolve_ancestor(record, ancestor))
        columns += ["Number", "NameRu", "NameKz"]
        values += [str(record.number), self.literal(record.name_ru), self.literal(record.name_kz)]
        return (
            f"INSERT INTO {level.table} ({', '.join(columns)}) "
            f"VALUES ({', '.join(values)});"
        )

    def insert_statements(self, data: ParsedData) -> list[str]:
        """INSERT statements in Part..SubClause order, document order within."""
        return [
            self.insert_statement(record)
            for _, records in data.iter_levels()
            for record in records
        ]

    def script(self, data: ParsedData, include_schema: bool = True) -> str:
        """A complete SQL script: schema, clearing, inserts."""
        sections = []
        if include_schema:
            sections.append("-- Schema\n" + "\n\n".join(self.schema_statements()))
        sections.append("-- Clear previous data\n" + "\n".join(self.clear_statements()))
        for level, records in data.iter_levels():
            if records:
                inserts = "\n".join(self.insert_statement(r) for r in records)
                sections.append(f"-- {level.table}\n{inserts}")
        return "\n\n".join(sections) + "\n"

    def _resolve_ancestor(self, record: LevelRecord, ancestor: Level) -> str:
        if record.ancestor_id(ancestor) == ABSENT_ID:
            return "NULL"
        conditions = [
            f"{outer.number_column} = {record.ancestor_id(outer)}"
            for outer in ancestors_of(ancestor)
        ]
        conditions.append(f"Number = {record.ancestor_id(ancestor)}")
        conditions.append(f"Id < {record.uid}")
        return f"(SELECT MAX(Id) FROM {ancestor.table} WHERE {' AND '.join(conditions)})"
