"""
Plain text document loader.

Legal texts exported from older systems are often in a Cyrillic code page
rather than UTF-8, so decoding falls back through the common ones.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, ClassVar

from lexparse.core.errors import LoaderError
from lexparse.loaders.base import BaseLoader, LoaderRegistry

logger = logging.getLogger(__name__)

_FALLBACK_ENCODINGS = ("cp1251", "koi8-r")


@LoaderRegistry.register
class TextLoader(BaseLoader):
    """Load plain text documents."""

    SUPPORTED_EXTENSIONS: ClassVar[list[str]] = [".txt", ".text"]
    LOADER_NAME: ClassVar[str] = "text"

    def load_text(self, path: Path) -> tuple[str, dict[str, Any]]:
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise LoaderError(
                f"Failed to read text file: {e}",
                source_path=path,
                details=str(e),
            ) from e

        text, encoding = self.decode(raw)
        return text, {"encoding": encoding, "line_count": len(text.splitlines())}

    def decode(self, raw: bytes) -> tuple[str, str]:
        """Decode *raw* bytes, returning ``(text, encoding used)``.

        Raises:
            LoaderError: If no supported encoding decodes the bytes.
        """
        try:
            return raw.decode("utf-8-sig"), "utf-8"
        except UnicodeDecodeError:
            pass

        for encoding in _FALLBACK_ENCODINGS:
            try:
                text = raw.decode(encoding)
            except UnicodeDecodeError:
                continue
            self._add_warning(f"Used fallback encoding: {encoding}")
            logger.warning("Decoded text with fallback encoding %s", encoding)
            return text, encoding

        raise LoaderError(
            "Could not decode text file with any supported encoding",
            details=f"Tried: utf-8, {', '.join(_FALLBACK_ENCODINGS)}",
        )
