"""
Module: project_view

Purpose:
    Provides the ProjectView dataclass - the finished, read-only result of
    parsing a project view file (directories, targets, build flags and the
    Java language level).

Dependencies:
    - dataclasses (std)

Used By:
    - projectview.builder.ProjectViewBuilder.build()
    - __main__: JSON dump of a parsed view
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple


@dataclass(frozen=True)
class ProjectView:
    """
    Parsed project view (immutable).

    Sequences keep the order in which their lines were met, with imported
    files spliced in at the point of their ``import`` line. Duplicates are
    kept.

    Attributes:
        directories: Workspace-relative directories
        targets: Build labels like "//foo/bar:target"
        build_flags: Flags passed to every build invocation
        java_language_level: Source level, 0 means use the toolchain default

    Example:
        >>> view = ProjectView(directories=("java",), targets=("//java/...",))
        >>> view.inherits_language_level
        True
    """

    directories: Tuple[str, ...] = ()
    targets: Tuple[str, ...] = ()
    build_flags: Tuple[str, ...] = ()
    java_language_level: int = 0

    def __post_init__(self) -> None:
        """Validate view on construction."""
        if self.java_language_level < 0:
            raise ValueError(
                f"java_language_level cannot be negative: {self.java_language_level}"
            )

    @property
    def inherits_language_level(self) -> bool:
        """True when the language level comes from the Java toolchain."""
        return self.java_language_level == 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "directories": list(self.directories),
            "targets": list(self.targets),
            "build_flags": list(self.build_flags),
            "java_language_level": self.java_language_level,
        }
