"""
Exception types shared across lexparse.

Only ``MalformedHeading`` is raised inside the parser, and it never escapes
the classifier. The rest belong to the collaborators around the core.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from lexparse.core.levels import Level


class LexparseError(Exception):
    """Base exception for lexparse errors."""


class MalformedHeading(LexparseError):
    """A line carries a heading marker but its identifier cannot be parsed."""

    def __init__(
        self,
        level: Level,
        token: str,
        line: str,
        line_number: int | None = None,
    ) -> None:
        self.level = level
        self.token = token
        self.line = line
        self.line_number = line_number
        super().__init__(
            f"Unparsable {level.label} identifier {token!r} in line: {line[:80]!r}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level.value,
            "token": self.token,
            "line": self.line,
            "line_number": self.line_number,
        }


class LoaderError(LexparseError):
    """Raised when a source document cannot be decoded to text."""

    def __init__(self, message: str, source_path: Path | None = None, details: str | None = None):
        self.source_path = source_path
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": str(self),
            "source_path": str(self.source_path) if self.source_path else None,
            "details": self.details,
        }


class UploadRejected(LexparseError):
    """Raised when an uploaded file fails validation.

    Attributes:
        status_code: HTTP status the server should answer with.
    """

    def __init__(self, message: str, status_code: int = 400) -> None:
        self.status_code = status_code
        super().__init__(message)


class ExportError(LexparseError):
    """Raised when an export format is unknown or cannot be written."""
