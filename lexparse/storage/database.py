"""SQLite-backed storage for parsed codes.

Executes the statements produced by ``SQLGenerator`` and reads rows back
per level.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any

from lexparse.core.levels import Level
from lexparse.core.records import ParsedData
from lexparse.exporters.sql import SQLGenerator

logger = logging.getLogger(__name__)


class SQLiteStore:
    """SQLite database holding one parsed code at a time.

    Args:
        db_path: Path to SQLite database file, or ':memory:' for in-memory.

    Example::

        with SQLiteStore("lexparse.db") as store:
            store.initialize_schema()
            store.replace(parsed_data)
    """

    def __init__(self, db_path: str | Path = ":memory:") -> None:
        self._db_path = str(db_path)
        if self._db_path != ":memory:":
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(self._db_path)
        self._conn.execute("PRAGMA foreign_keys = ON")
        self._conn.row_factory = sqlite3.Row
        self._generator = SQLGenerator("sqlite")

    def __enter__(self) -> SQLiteStore:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    def initialize_schema(self) -> None:
        """Create all level tables if they don't exist."""
        self._conn.executescript("\n".join(self._generator.schema_statements()))
        self._conn.commit()

    def execute_queries(self, queries: list[str]) -> None:
        """Run *queries* in one transaction; roll back on the first failure.

        Raises:
            sqlite3.Error: Propagated from the failing statement.
        """
        try:
            for query in queries:
                self._conn.execute(query)
        except sqlite3.Error:
            self._conn.rollback()
            raise
        self._conn.commit()

    def replace(self, data: ParsedData) -> int:
        """Replace the stored code with *data*.

        Returns:
            Number of rows inserted.
        """
        queries = self._generator.clear_statements() + self._generator.insert_statements(data)
        self.execute_queries(queries)
        logger.info("Stored %d records in %s", data.total, self._db_path)
        return data.total

    def count(self, level: Level) -> int:
        row = self._conn.execute(f"SELECT COUNT(*) FROM {level.table}").fetchone()
        return int(row[0])

    def fetch(self, level: Level) -> list[dict[str, Any]]:
        """All rows of *level*'s table, ordered by surrogate id."""
        rows = self._conn.execute(f"SELECT * FROM {level.table} ORDER BY Id").fetchall()
        return [dict(row) for row in rows]
