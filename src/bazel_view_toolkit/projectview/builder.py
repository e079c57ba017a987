"""
Module: projectview.builder

Purpose:
    Build a ProjectView from project view files (``.bazelproject``) or
    from direct calls. Follows ``import`` lines depth-first, splicing the
    imported content in at the point of the import.

Key Functions:
    - parse_project_view(): Parse a file path or URL into a ProjectView

Key Classes:
    - ProjectViewBuilder: Accumulates directories, targets, flags and the
      language level, then snapshots them with build()
    - ParseState: Mutable accumulator threaded through recursive imports

Dependencies:
    - requests: Fetching http(s) project views
    - projectview.classifier: Line grammar
    - core.models.ProjectView

Used By:
    - __main__: ``view`` command
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union
from urllib.parse import urljoin, urlsplit
from urllib.request import url2pathname

import requests

from bazel_view_toolkit.config import DEFAULT_CONFIG, ToolkitConfig
from bazel_view_toolkit.core.models import ProjectView

from .classifier import (
    BUILD_FLAGS,
    DIRECTORIES,
    JAVA_LANGUAGE_LEVEL,
    TARGETS,
    LineKind,
    classify_line,
)
from .errors import CyclicImportError

logger = logging.getLogger(__name__)

_URL_SCHEMES = ("http", "https")

ViewSource = Union[str, os.PathLike]


@dataclass
class ParseState:
    """
    Everything a parse accumulates.

    One instance is shared by the top-level view and all views it imports,
    so imports are inlined rather than scoped. The open section is not part
    of it: each source tracks its own.

    Attributes:
        directories: Accumulated ``directories`` items
        targets: Accumulated ``targets`` items
        build_flags: Accumulated ``build_flags`` items
        java_language_level: Last ``java_language_level`` seen, 0 if none
        import_stack: Sources currently being parsed, outermost first
    """

    directories: List[str] = field(default_factory=list)
    targets: List[str] = field(default_factory=list)
    build_flags: List[str] = field(default_factory=list)
    java_language_level: int = 0
    import_stack: List[str] = field(default_factory=list)

    def section_items(self, section: str) -> Optional[List[str]]:
        """List that items of ``section`` go to, None for unknown sections."""
        if section == DIRECTORIES:
            return self.directories
        if section == TARGETS:
            return self.targets
        if section == BUILD_FLAGS:
            return self.build_flags
        return None


def _is_url(source: ViewSource) -> bool:
    return isinstance(source, str) and urlsplit(source).scheme in _URL_SCHEMES


def _split_lines(text: str) -> List[str]:
    """Split on \\n, \\r\\n and \\r. A trailing terminator adds no line."""
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class ProjectViewBuilder:
    """
    Accumulates a project view and snapshots it into a ProjectView.

    Two ways in:
    - Direct calls (``add_directory()``, ``set_java_language_level()``, ...)
    - Parsing (``parse_view()``, ``parse_url()``, ``parse()``)

    The language level follows two contracts. ``set_java_language_level()``
    refuses non-positive values and refuses to run twice. A
    ``java_language_level:`` line in a parsed file overwrites any earlier
    value and may set it back to 0.

    ``build()`` copies the accumulated lists, so later calls on the builder
    do not affect views already built.

    Example:
        >>> view = (ProjectViewBuilder()
        ...         .add_directory("java/com/example")
        ...         .add_target("//java/com/example/...")
        ...         .build())
        >>> view.targets
        ('//java/com/example/...',)
    """

    def __init__(self, config: Optional[ToolkitConfig] = None):
        self._config = config or DEFAULT_CONFIG
        self._state = ParseState()

    def add_build_flag(self, *flags: str) -> ProjectViewBuilder:
        self._state.build_flags.extend(flags)
        return self

    def add_directory(self, *directories: str) -> ProjectViewBuilder:
        self._state.directories.extend(directories)
        return self

    def add_target(self, *targets: str) -> ProjectViewBuilder:
        self._state.targets.extend(targets)
        return self

    def set_java_language_level(self, level: int) -> ProjectViewBuilder:
        """
        Set the Java language level.

        Raises:
            ValueError: If level <= 0 or the level was already set
        """
        if level <= 0:
            raise ValueError(
                f"Can only set java language level to a value > 0: {level}"
            )
        if self._state.java_language_level != 0:
            raise ValueError(
                f"Java language level was already set to "
                f"{self._state.java_language_level}"
            )
        self._state.java_language_level = level
        return self

    def parse(self, source: ViewSource) -> ProjectViewBuilder:
        """Parse a file path, ``file:`` URL or http(s) URL."""
        if _is_url(source):
            return self.parse_url(source)
        if isinstance(source, str) and urlsplit(source).scheme == "file":
            return self.parse_view(Path(url2pathname(urlsplit(source).path)))
        return self.parse_view(Path(source))

    def parse_view(self, path: ViewSource) -> ProjectViewBuilder:
        """
        Parse the project view file at ``path``, following imports.

        Raises:
            ProjectViewParseError: On a grammar error
            CyclicImportError: If the view imports itself
            OSError: If a file cannot be read
        """
        _parse_file(Path(path), self._state, self._config)
        return self

    def parse_url(self, url: str) -> ProjectViewBuilder:
        """
        Parse the project view at an http(s) ``url``, following imports.

        Relative imports resolve against the URL.

        Raises:
            ProjectViewParseError: On a grammar error
            requests.RequestException: If the resource cannot be fetched
        """
        _parse_url(url, self._state, self._config)
        return self

    def build(self) -> ProjectView:
        """Snapshot the accumulated state into an immutable ProjectView."""
        return ProjectView(
            directories=tuple(self._state.directories),
            targets=tuple(self._state.targets),
            build_flags=tuple(self._state.build_flags),
            java_language_level=self._state.java_language_level,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Parsing
# ─────────────────────────────────────────────────────────────────────────────

# (source name, line number) of the import line that led to a source
_Origin = Tuple[str, int]


def _parse_file(
    path: Path,
    state: ParseState,
    config: ToolkitConfig,
    origin: _Origin = ("", 0),
) -> None:
    logger.debug(f"Parsing project view {path}")
    _enter(str(path.resolve()), state, config, origin)
    try:
        text = path.read_text(encoding=config.encoding)
        _parse_lines(_split_lines(text), str(path), path.parent, state, config)
    finally:
        state.import_stack.pop()


def _parse_url(
    url: str,
    state: ParseState,
    config: ToolkitConfig,
    origin: _Origin = ("", 0),
) -> None:
    logger.debug(f"Fetching project view {url}")
    _enter(url, state, config, origin)
    try:
        response = requests.get(url, timeout=config.url_timeout)
        response.raise_for_status()
        text = response.content.decode(config.encoding)
        _parse_lines(_split_lines(text), url, url, state, config)
    finally:
        state.import_stack.pop()


def _enter(key: str, state: ParseState, config: ToolkitConfig, origin: _Origin) -> None:
    """Push ``key`` on the import stack, failing on a cycle."""
    if config.detect_import_cycles and key in state.import_stack:
        source, line_number = origin
        raise CyclicImportError(
            state.import_stack + [key],
            source=source,
            line_number=line_number,
        )
    state.import_stack.append(key)


def _parse_lines(
    lines: List[str],
    name: str,
    base: Union[Path, str],
    state: ParseState,
    config: ToolkitConfig,
) -> None:
    section: Optional[str] = None
    for line_number, line in enumerate(lines, start=1):
        parsed = classify_line(line, section, source=name, line_number=line_number)

        if parsed.kind is LineKind.BLANK:
            section = None
        elif parsed.kind is LineKind.ITEM:
            items = state.section_items(section)
            if items is not None:
                items.append(parsed.value)
        elif parsed.kind is LineKind.IMPORT:
            _follow_import(parsed.value, base, state, config, (name, line_number))
            # an import ends the importing view's current section
            section = None
        elif parsed.kind is LineKind.SECTION:
            section = parsed.value
        elif parsed.kind is LineKind.PROPERTY:
            if parsed.name == JAVA_LANGUAGE_LEVEL:
                state.java_language_level = int(parsed.value)
            else:
                logger.debug(
                    f"Ignoring unknown property {parsed.name!r} "
                    f"at line {line_number} of {name}"
                )


def _follow_import(
    path: str,
    base: Union[Path, str],
    state: ParseState,
    config: ToolkitConfig,
    origin: _Origin,
) -> None:
    if path.startswith("/") or path.startswith(os.sep):
        _parse_file(Path(path), state, config, origin)
    elif isinstance(base, str):
        _parse_url(urljoin(base, path), state, config, origin)
    else:
        _parse_file(base / path, state, config, origin)


def parse_project_view(
    source: ViewSource,
    *,
    config: Optional[ToolkitConfig] = None,
) -> ProjectView:
    """
    Parse a project view file or URL into a ProjectView.

    Args:
        source: File path, ``file:`` URL or http(s) URL
        config: Reading options (encoding, cycle detection, URL timeout)

    Returns:
        ProjectView with all imports inlined

    Raises:
        ProjectViewParseError: On a grammar error (CyclicImportError on a
            cyclic import)
        OSError, requests.RequestException: If a view cannot be read

    Example:
        >>> view = parse_project_view("ide/project.bazelproject")
        >>> view.java_language_level
        8
    """
    view = ProjectViewBuilder(config).parse(source).build()
    logger.info(
        f"Parsed project view {source}: {len(view.directories)} directories, "
        f"{len(view.targets)} targets, {len(view.build_flags)} build flags"
    )
    return view
