"""Database persistence for parsed codes."""

from lexparse.storage.database import SQLiteStore

__all__ = ["SQLiteStore"]
