"""
Schema Validation Utilities

Validates build-info JSON objects before they are decoded into BuildInfo.

Two layers:
- Basic checks (always run): required keys and JSON types, reporting the
  exact key path that failed, e.g. ``jars[1].jar``
- Full JSON Schema validation (strict mode) against
  ``build_info.schema.json`` using jsonschema
"""

from __future__ import annotations

import functools
import json
from pathlib import Path
from typing import Any

import jsonschema


BUILD_INFO_REQUIRED_FIELDS = (
    "jars",
    "generated_jars",
    "build_file_artifact_location",
    "kind",
    "label",
    "dependencies",
    "sources",
)
JAR_GROUP_REQUIRED_FIELDS = ("jar",)

_STRING_FIELDS = ("build_file_artifact_location", "kind", "label")
_ARRAY_FIELDS = ("dependencies", "sources")
_JAR_ARRAY_FIELDS = ("jars", "generated_jars")
_OPTIONAL_JAR_FIELDS = ("interface_jar", "srcjar")

BUILD_INFO_SCHEMA_FILE = "build_info.schema.json"


@functools.lru_cache(maxsize=None)
def _build_info_schema() -> dict:
    """Read the bundled build-info schema once per process."""
    schema_path = Path(__file__).with_name(BUILD_INFO_SCHEMA_FILE)
    with open(schema_path, "r", encoding="utf-8") as f:
        return json.load(f)


class SchemaValidationError(Exception):
    """
    A build-info document or jar group has the wrong shape.

    Attributes:
        path: Key path of the offending value in the document, e.g.
            "label" or "generated_jars[0].srcjar". Empty when the whole
            document is wrong.
        errors: One line per problem found (several when more than one
            required key is missing)
    """

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors if errors is not None else [message]


def validate_build_info(data: Any, *, strict: bool = False) -> None:
    """
    Validate a build-info JSON object.

    Args:
        data: Decoded JSON document
        strict: If True, also validate against the JSON schema

    Raises:
        SchemaValidationError: If data is invalid. ``path`` names the
            offending key.
    """
    if not isinstance(data, dict):
        raise SchemaValidationError(
            f"Build info must be a JSON object, got {type(data).__name__}",
            path="",
        )

    missing = [f for f in BUILD_INFO_REQUIRED_FIELDS if f not in data]
    if missing:
        raise SchemaValidationError(
            f"Missing required fields: {missing}",
            path=missing[0],
            errors=[f"Missing field: {f}" for f in missing],
        )

    for name in _STRING_FIELDS:
        if not isinstance(data[name], str):
            raise SchemaValidationError(
                f"{name} must be a string: {data[name]!r}",
                path=name,
            )

    for name in _ARRAY_FIELDS + _JAR_ARRAY_FIELDS:
        if not isinstance(data[name], list):
            raise SchemaValidationError(
                f"{name} must be an array",
                path=name,
            )

    for name in _JAR_ARRAY_FIELDS:
        for i, item in enumerate(data[name]):
            validate_jar_group(item, f"{name}[{i}]")

    if strict:
        try:
            jsonschema.validate(data, _build_info_schema())
        except jsonschema.ValidationError as e:
            raise SchemaValidationError(
                f"Schema validation failed: {e.message}",
                path=_format_path(e.absolute_path),
                errors=[e.message],
            )


def validate_jar_group(data: Any, path: str = "") -> None:
    """
    Validate one element of a ``jars``/``generated_jars`` array.

    Args:
        data: Decoded JSON value
        path: Key path of the element, e.g. "jars[0]", used as the prefix
            of ``SchemaValidationError.path``

    Raises:
        SchemaValidationError: If data is not an object with a string
            ``jar`` and optional string ``interface_jar``/``srcjar``
    """
    if not isinstance(data, dict):
        raise SchemaValidationError(
            "jar group must be a JSON object",
            path=path,
        )

    missing = [f for f in JAR_GROUP_REQUIRED_FIELDS if f not in data]
    if missing:
        raise SchemaValidationError(
            f"Jar group missing required fields: {missing}",
            path=_join(path, missing[0]),
            errors=[f"Missing field: {f}" for f in missing],
        )

    if not isinstance(data["jar"], str):
        raise SchemaValidationError(
            f"jar must be a string: {data['jar']!r}",
            path=_join(path, "jar"),
        )

    for name in _OPTIONAL_JAR_FIELDS:
        if name in data and not isinstance(data[name], str):
            raise SchemaValidationError(
                f"{name} must be a string: {data[name]!r}",
                path=_join(path, name),
            )


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _format_path(parts) -> str:
    """Render a jsonschema path deque as ``jars[0].jar``."""
    text = ""
    for part in parts:
        if isinstance(part, int):
            text += f"[{part}]"
        else:
            text += f".{part}" if text else str(part)
    return text
