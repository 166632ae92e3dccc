"""
Base loader class and registry for document loaders.

Loaders decode a source file to the plain text the parser consumes. Each
loader registers itself with the LoaderRegistry for automatic format
detection by extension.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar

from lexparse.core.errors import LoaderError


@dataclass
class LoadedText:
    """Plain text decoded from a source document."""

    text: str
    source_path: Path | None = None
    source_type: str = "txt"
    loader: str = ""
    warnings: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source_path.name if self.source_path else None,
            "source_type": self.source_type,
            "loader": self.loader,
            "characters": len(self.text),
            "warnings": self.warnings,
            "metadata": self.metadata,
        }


class BaseLoader(ABC):
    """
    Abstract base class for document loaders.

    Each loader is responsible for:
    1. Detecting if it can handle a file type
    2. Decoding the file to plain text, one heading or paragraph per line
    """

    SUPPORTED_EXTENSIONS: ClassVar[list[str]] = []
    LOADER_NAME: ClassVar[str] = "base"

    def __init__(self) -> None:
        self._warnings: list[str] = []

    @classmethod
    def can_load(cls, path: Path) -> bool:
        """Check if this loader can handle the given file."""
        return path.suffix.lower() in cls.SUPPORTED_EXTENSIONS

    @abstractmethod
    def load_text(self, path: Path) -> tuple[str, dict[str, Any]]:
        """
        Decode a document.

        Returns:
            Tuple of (text, metadata)

        Raises:
            LoaderError: If decoding fails
        """

    def load(self, path: Path) -> LoadedText:
        """Validate *path*, decode it and wrap the result."""
        if not path.exists():
            raise LoaderError(f"File not found: {path}", source_path=path)

        if not self.can_load(path):
            raise LoaderError(
                f"Unsupported file type: {path.suffix}",
                source_path=path,
                details=f"Supported types: {', '.join(self.SUPPORTED_EXTENSIONS)}",
            )

        self._warnings = []
        text, metadata = self.load_text(path)
        metadata["file_size_bytes"] = path.stat().st_size

        return LoadedText(
            text=text,
            source_path=path,
            source_type=path.suffix.lower().lstrip("."),
            loader=self.LOADER_NAME,
            warnings=list(self._warnings),
            metadata=metadata,
        )

    @property
    def warnings(self) -> list[str]:
        """Get any warnings that occurred during loading."""
        return self._warnings

    def _add_warning(self, warning: str) -> None:
        self._warnings.append(warning)


class LoaderRegistry:
    """
    Registry of available document loaders.

    Use this to automatically select the appropriate loader for a file.
    """

    _loaders: ClassVar[list[type[BaseLoader]]] = []

    @classmethod
    def register(cls, loader_class: type[BaseLoader]) -> type[BaseLoader]:
        """
        Register a loader class. Can be used as a decorator.

        @LoaderRegistry.register
        class MyLoader(BaseLoader):
            ...
        """
        if loader_class not in cls._loaders:
            cls._loaders.append(loader_class)
        return loader_class

    @classmethod
    def get_loader(cls, path: Path) -> BaseLoader | None:
        """Get an appropriate loader for the given file path."""
        for loader_class in cls._loaders:
            if loader_class.can_load(path):
                return loader_class()
        return None

    @classmethod
    def supported_extensions(cls) -> list[str]:
        """Get all supported file extensions, sorted."""
        extensions = []
        for loader_class in cls._loaders:
            extensions.extend(loader_class.SUPPORTED_EXTENSIONS)
        return sorted(set(extensions))

    @classmethod
    def load(cls, path: Path) -> LoadedText:
        """
        Decode a document using the appropriate loader.

        Raises:
            LoaderError: If no loader is available or loading fails
        """
        loader = cls.get_loader(path)
        if loader is None:
            supported = ", ".join(cls.supported_extensions())
            raise LoaderError(
                f"No loader available for file type: {path.suffix}",
                source_path=path,
                details=f"Supported types: {supported}",
            )
        return loader.load(path)
