"""Document loaders: decode source files to plain text."""

from lexparse.loaders.base import BaseLoader, LoadedText, LoaderRegistry
from lexparse.loaders.docx import DocxLoader
from lexparse.loaders.text import TextLoader

__all__ = [
    "BaseLoader",
    "DocxLoader",
    "LoadedText",
    "LoaderRegistry",
    "TextLoader",
]
