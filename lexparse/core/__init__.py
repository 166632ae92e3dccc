"""Core data models and abstractions for lexparse."""

from lexparse.core.errors import (
    ExportError,
    LexparseError,
    LoaderError,
    MalformedHeading,
    UploadRejected,
)
from lexparse.core.levels import (
    ABSENT_ID,
    LEVEL_ORDER,
    Level,
    ancestors_of,
    descendants_of,
    level_from_key,
)
from lexparse.core.records import (
    SCHEMA_VERSION,
    LevelRecord,
    ParsedData,
    columns_for,
)

__all__ = [
    "ABSENT_ID",
    "ExportError",
    "LEVEL_ORDER",
    "Level",
    "LevelRecord",
    "LexparseError",
    "LoaderError",
    "MalformedHeading",
    "ParsedData",
    "SCHEMA_VERSION",
    "UploadRejected",
    "ancestors_of",
    "columns_for",
    "descendants_of",
    "level_from_key",
]
