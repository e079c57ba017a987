"""
Module: build_info

Purpose:
    Provides the BuildInfo dataclass - one target's entry from the JSON
    files written by the IDE build-info aspect: where it is declared, what
    kind of rule it is, what it depends on, what it compiles and which jars
    it produces.

Key Functions:
    - BuildInfo.from_dict(data): Decode one build-info JSON object
    - coerce_label(value): Render a JSON array element as a string

Dependencies:
    - json (std)
    - .jars.JarGroup

Used By:
    - buildinfo.parser: File decoding
    - buildinfo.loader: Label-keyed aggregation
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Tuple

from .jars import JarGroup


def coerce_label(value: Any) -> str:
    """
    Render a ``dependencies``/``sources`` element as text.

    Strings are returned untouched; any other JSON value is rendered in its
    compact JSON form, so ``1`` becomes ``"1"`` and ``None`` becomes
    ``"null"``.
    """
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"))


def _jar_groups(items: Iterable[Mapping[str, Any]]) -> Tuple[JarGroup, ...]:
    return tuple(JarGroup.from_dict(item) for item in items)


@dataclass(frozen=True)
class BuildInfo:
    """
    Build information for a single target (immutable).

    Attributes:
        label: Target label, unique across one aggregation
        location: Build file location (``build_file_artifact_location``)
        kind: Rule kind, e.g. "java_library" or "java_test"
        dependencies: Labels of direct dependencies
        sources: Source files consumed by the target
        generated_jars: Jars produced by annotation processors
        jars: Jars produced by building the target (``jars`` key)

    Example:
        >>> info = BuildInfo.from_dict({
        ...     "label": "//a:a", "kind": "java_library",
        ...     "build_file_artifact_location": "a/BUILD",
        ...     "dependencies": [], "sources": ["a/A.java"],
        ...     "jars": [{"jar": "liba.jar"}], "generated_jars": [],
        ... })
        >>> info.jars[0].jar
        'liba.jar'
    """

    label: str
    location: str
    kind: str
    dependencies: Tuple[str, ...] = ()
    sources: Tuple[str, ...] = ()
    generated_jars: Tuple[JarGroup, ...] = ()
    jars: Tuple[JarGroup, ...] = ()

    def __post_init__(self) -> None:
        """Validate build info on construction."""
        for name in ("label", "location", "kind"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise TypeError(f"{name} must be a string: {value!r}")

    @property
    def output_jars(self) -> Tuple[JarGroup, ...]:
        """Alias of ``jars``: the jars produced by building this target."""
        return self.jars

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BuildInfo:
        """
        Decode a build-info JSON object.

        Assumes the required keys are present; ``buildinfo.parser`` checks
        shape first and reports which key is missing.

        Raises:
            KeyError: If a required key is missing
            TypeError, ValueError: If a value has the wrong type
        """
        return cls(
            label=data["label"],
            location=data["build_file_artifact_location"],
            kind=data["kind"],
            dependencies=tuple(coerce_label(dep) for dep in data["dependencies"]),
            sources=tuple(coerce_label(src) for src in data["sources"]),
            generated_jars=_jar_groups(data["generated_jars"]),
            jars=_jar_groups(data["jars"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "build_file_artifact_location": self.location,
            "kind": self.kind,
            "dependencies": list(self.dependencies),
            "sources": list(self.sources),
            "generated_jars": [jar.to_dict() for jar in self.generated_jars],
            "jars": [jar.to_dict() for jar in self.jars],
        }

    def __str__(self) -> str:
        return (
            "BuildInfo(\n"
            f"  label = {self.label},\n"
            f"  location = {self.location},\n"
            f"  kind = {self.kind},\n"
            f"  jars = [{','.join(str(j) for j in self.jars)}],\n"
            f"  generated_jars = [{','.join(str(j) for j in self.generated_jars)}],\n"
            f"  dependencies = [{','.join(self.dependencies)}],\n"
            f"  sources = [{','.join(self.sources)}])"
        )
