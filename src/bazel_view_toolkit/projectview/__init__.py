"""
Module: projectview

Purpose:
    Parse project view files (``.bazelproject``) into ProjectView models.
    Supports sections of indented items, ``java_language_level`` and
    recursive ``import`` lines.

Key Functions:
    - parse_project_view(): Parse a file or URL
    - classify_line(): Classify a single line

Key Classes:
    - ProjectViewBuilder: Programmatic and parsed accumulation
    - ProjectViewParseError, CyclicImportError: Parse failures
"""

from .builder import ParseState, ProjectViewBuilder, parse_project_view
from .classifier import ClassifiedLine, LineKind, classify_line
from .errors import CyclicImportError, ProjectViewParseError

__all__ = [
    "ParseState",
    "ProjectViewBuilder",
    "parse_project_view",
    "ClassifiedLine",
    "LineKind",
    "classify_line",
    "CyclicImportError",
    "ProjectViewParseError",
]
