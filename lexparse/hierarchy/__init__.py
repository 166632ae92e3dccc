"""
Hierarchy module - the structural parser of lexparse.

Classifies heading lines, tracks the open ancestors while scanning, builds
the document tree and flattens it into per-level records.
"""

from lexparse.hierarchy.builder import AttachMode, TreeBuilder, build_tree
from lexparse.hierarchy.classifier import (
    DEFAULT_RULES,
    HeadingMatch,
    HeadingRule,
    LineClassifier,
)
from lexparse.hierarchy.context import ContextTracker
from lexparse.hierarchy.flattener import Flattener
from lexparse.hierarchy.numbering import NumberingValidator
from lexparse.hierarchy.titles import SplitMode, TitleSplitter
from lexparse.hierarchy.tree import DocumentNode, DocumentTree, ParseDiagnostics

__all__ = [
    "AttachMode",
    "ContextTracker",
    "DEFAULT_RULES",
    "DocumentNode",
    "DocumentTree",
    "Flattener",
    "HeadingMatch",
    "HeadingRule",
    "LineClassifier",
    "NumberingValidator",
    "ParseDiagnostics",
    "SplitMode",
    "TitleSplitter",
    "TreeBuilder",
    "build_tree",
]
