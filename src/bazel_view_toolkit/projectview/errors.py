"""
Module: projectview.errors

Purpose:
    Exceptions raised while parsing project view files.

Key Classes:
    - ProjectViewParseError: Grammar error at a given file and line
    - CyclicImportError: A project view imports itself, directly or not

Used By:
    - projectview.classifier
    - projectview.builder
"""

from __future__ import annotations

from typing import Sequence


class ProjectViewParseError(Exception):
    """
    Grammar error in a project view.

    Attributes:
        source: File path or URL of the project view being parsed
        line_number: 1-based line of the error (0 when not line-specific)
    """

    def __init__(self, message: str, *, source: str = "", line_number: int = 0):
        super().__init__(message)
        self.source = source
        self.line_number = line_number


class CyclicImportError(ProjectViewParseError):
    """
    Raised when an ``import`` line names a project view that is already
    being parsed further up the import chain.

    Attributes:
        chain: Sources from the outermost view to the repeated one
    """

    def __init__(self, chain: Sequence[str], *, source: str = "", line_number: int = 0):
        self.chain = tuple(chain)
        super().__init__(
            f"Line {line_number} of project view {source}: cyclic import "
            + " -> ".join(self.chain),
            source=source,
            line_number=line_number,
        )
