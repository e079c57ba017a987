"""
Module: projectview.classifier

Purpose:
    Decide what a single project view line is. Pure function: no parse
    state is read or written here, the caller passes the current section
    in and applies the result.

Key Functions:
    - classify_line(): Classify one line

Key Classes:
    - LineKind: The six line shapes of the format
    - ClassifiedLine: Result of classification

Grammar (checked in this order):
    ""                     BLANK    closes the current section
    "  <item>"             ITEM     item of the current section
    "import <path>"        IMPORT   inline another project view
    "<name>:"              SECTION  opens a section
    "<label>: <value>"     PROPERTY scalar property
    "# ..." (trimmed)      COMMENT  only when the line has no colon
    anything else          syntax error

Used By:
    - projectview.builder
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import ProjectViewParseError


DIRECTORIES = "directories"
TARGETS = "targets"
BUILD_FLAGS = "build_flags"
IMPORT = "import"
JAVA_LANGUAGE_LEVEL = "java_language_level"

LIST_SECTIONS = (DIRECTORIES, TARGETS, BUILD_FLAGS)
RESERVED_LABELS = (DIRECTORIES, IMPORT, TARGETS, BUILD_FLAGS)

ITEM_INDENT = "  "
IMPORT_PREFIX = "import "

_LANGUAGE_LEVEL_RE = re.compile(r"[0-9]+")


class LineKind(Enum):
    BLANK = "blank"
    ITEM = "item"
    IMPORT = "import"
    COMMENT = "comment"
    SECTION = "section"
    PROPERTY = "property"


@dataclass(frozen=True)
class ClassifiedLine:
    """
    One classified line.

    Attributes:
        kind: Line shape
        value: Item text, import path, section name or property value
        name: Property label (PROPERTY only)
    """

    kind: LineKind
    value: str = ""
    name: str = ""


def classify_line(
    line: str,
    section: Optional[str],
    *,
    source: str = "<string>",
    line_number: int = 0,
) -> ClassifiedLine:
    """
    Classify a single project view line.

    Args:
        line: Line text without its line terminator
        section: Name of the section currently open, or None
        source: File path or URL, for error messages
        line_number: 1-based line number, for error messages

    Returns:
        ClassifiedLine describing the line

    Raises:
        ProjectViewParseError: If the line breaks the grammar

    Example:
        >>> classify_line("  //foo:bar", "targets").value
        '//foo:bar'
        >>> classify_line("java_language_level: 8", None).name
        'java_language_level'
    """
    if not line:
        return ClassifiedLine(LineKind.BLANK)

    if line.startswith(ITEM_INDENT):
        if section is None:
            raise ProjectViewParseError(
                f"Line {line_number} of project view {source} is not in a section",
                source=source,
                line_number=line_number,
            )
        return ClassifiedLine(LineKind.ITEM, value=line[len(ITEM_INDENT):])

    if line.startswith(IMPORT_PREFIX):
        return ClassifiedLine(LineKind.IMPORT, value=line[len(IMPORT_PREFIX):])

    stripped = line.strip()
    if ":" in stripped:
        if stripped.endswith(":"):
            name = stripped[:-1]
            if name == JAVA_LANGUAGE_LEVEL:
                raise ProjectViewParseError(
                    f"Line {line_number} of project view {source}: "
                    f"{JAVA_LANGUAGE_LEVEL} cannot be a section name",
                    source=source,
                    line_number=line_number,
                )
            return ClassifiedLine(LineKind.SECTION, value=name)

        label, _, value = stripped.partition(":")
        label = label.strip()
        value = value.strip()
        if label in RESERVED_LABELS:
            raise ProjectViewParseError(
                f"Line {line_number} of project view {source}: "
                f"{label} cannot be a label name",
                source=source,
                line_number=line_number,
            )
        if label == JAVA_LANGUAGE_LEVEL and not _LANGUAGE_LEVEL_RE.fullmatch(value):
            raise ProjectViewParseError(
                f"Line {line_number} of project view {source}: "
                f"{JAVA_LANGUAGE_LEVEL} should be an integer.",
                source=source,
                line_number=line_number,
            )
        return ClassifiedLine(LineKind.PROPERTY, value=value, name=label)

    if stripped.startswith("#"):
        return ClassifiedLine(LineKind.COMMENT, value=stripped[1:])

    raise ProjectViewParseError(
        f"Project view {source} contains a syntax error at line {line_number}",
        source=source,
        line_number=line_number,
    )
