"""
lexparse - structural parser for bilingual (Russian/Kazakh) legal codes.

Turns the plain text of a code into a tree of Parts, Sections, Chapters,
Paragraphs, Articles, Clauses and SubClauses, then flattens it into seven
per-level record lists ready for CSV, Excel or SQL export.
"""

__version__ = "0.1.0"

from lexparse.core import Level, LevelRecord, ParsedData
from lexparse.hierarchy import AttachMode, DocumentTree, SplitMode, TreeBuilder, build_tree

__all__ = [
    "AttachMode",
    "DocumentTree",
    "Level",
    "LevelRecord",
    "ParsedData",
    "SplitMode",
    "TreeBuilder",
    "__version__",
    "build_tree",
]
