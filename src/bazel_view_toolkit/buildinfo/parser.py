"""
Module: buildinfo.parser

Purpose:
    Decode the JSON files written by the IDE build-info aspect into
    BuildInfo records.

Key Functions:
    - parse_build_info(): Parse one build-info JSON file
    - parse_build_info_from_dict(): Decode an already loaded JSON object
    - parse_jar_group(): Decode one element of a jars array

Key Classes:
    - BuildInfoDecodeError: Exception for decode failures

Dependencies:
    - json (std)
    - core.schemas.validator: Shape validation (jsonschema in strict mode)
    - core.models.BuildInfo

Used By:
    - buildinfo.loader: Label-keyed aggregation
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

from bazel_view_toolkit.config import DEFAULT_CONFIG, ToolkitConfig
from bazel_view_toolkit.core.models import BuildInfo, JarGroup
from bazel_view_toolkit.core.schemas import (
    SchemaValidationError,
    validate_build_info,
    validate_jar_group,
)

logger = logging.getLogger(__name__)


class BuildInfoDecodeError(Exception):
    """
    Error decoding a build-info document.

    Attributes:
        source: File the document came from
        key: Key path that failed, e.g. "label" or "jars[0].jar"; empty
            when the document is not valid JSON at all
    """

    def __init__(self, message: str, *, source: str = "", key: str = ""):
        super().__init__(message)
        self.source = source
        self.key = key


def parse_build_info(
    path: Union[str, os.PathLike],
    *,
    config: Optional[ToolkitConfig] = None,
) -> BuildInfo:
    """
    Parse one build-info JSON file.

    Args:
        path: Path to the JSON file
        config: Encoding and schema strictness

    Returns:
        BuildInfo record

    Raises:
        BuildInfoDecodeError: If the file is not valid JSON or has the
            wrong shape
        OSError: If the file cannot be read

    Example:
        >>> info = parse_build_info("bazel-bin/foo/foo.java-info.json")
        >>> info.kind
        'java_library'
    """
    config = config or DEFAULT_CONFIG
    path = Path(path)

    with open(path, "r", encoding=config.encoding) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise BuildInfoDecodeError(
                f"Invalid JSON in {path}: {e}", source=str(path)
            ) from e

    return parse_build_info_from_dict(data, source=str(path), strict=config.strict_schema)


def parse_build_info_from_dict(
    data: Any,
    *,
    source: str = "<dict>",
    strict: bool = False,
) -> BuildInfo:
    """
    Decode a build-info JSON object.

    Args:
        data: Decoded JSON document
        source: Source identifier for error messages
        strict: Also validate against the bundled JSON schema

    Returns:
        BuildInfo record

    Raises:
        BuildInfoDecodeError: If a required key is missing or a value has
            the wrong JSON type
    """
    try:
        validate_build_info(data, strict=strict)
    except SchemaValidationError as e:
        raise BuildInfoDecodeError(
            f"Invalid build info in {source}: {e}", source=source, key=e.path
        ) from e

    try:
        return BuildInfo.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise BuildInfoDecodeError(
            f"Invalid field in {source}: {e}", source=source
        ) from e


def parse_jar_group(
    data: Any,
    *,
    source: str = "<dict>",
    path: str = "",
) -> JarGroup:
    """
    Decode one ``jars``/``generated_jars`` element into a JarGroup.

    Args:
        data: Decoded JSON value
        source: Source identifier for error messages
        path: Key path of the element, e.g. "jars[2]"

    Returns:
        JarGroup with absent ``interface_jar``/``srcjar`` keys as None

    Raises:
        BuildInfoDecodeError: If ``jar`` is missing or a value is not a
            string. ``key`` names the failing key, e.g. "jars[2].jar".

    Example:
        >>> parse_jar_group({"jar": "liba.jar", "srcjar": "liba-src.jar"})
        JarGroup(jar='liba.jar', interface_jar=None, source_jar='liba-src.jar')
    """
    try:
        validate_jar_group(data, path)
    except SchemaValidationError as e:
        raise BuildInfoDecodeError(
            f"Invalid jar group in {source}: {e}", source=source, key=e.path
        ) from e
    return JarGroup.from_dict(data)
