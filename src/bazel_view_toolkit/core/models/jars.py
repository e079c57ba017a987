"""
Module: jars

Purpose:
    Provides the JarGroup dataclass - the jars produced for one target:
    the class jar, plus the optional interface jar and source jar.

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.build_info.BuildInfo
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class JarGroup:
    """
    One jar triple from a build-info document.

    ``None`` is the only "absent" state for the optional jars. An empty
    string is a present (if odd) value and compares unequal to ``None``.

    Attributes:
        jar: Path of the class jar (``jar`` key)
        interface_jar: Path of the interface jar (``interface_jar`` key)
        source_jar: Path of the source jar (``srcjar`` key)

    Example:
        >>> JarGroup("lib.jar", source_jar="lib-src.jar")
        JarGroup(jar='lib.jar', interface_jar=None, source_jar='lib-src.jar')
    """

    jar: str
    interface_jar: Optional[str] = None
    source_jar: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate jar paths on construction."""
        if not isinstance(self.jar, str):
            raise TypeError(f"jar must be a string: {self.jar!r}")
        for name in ("interface_jar", "source_jar"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise TypeError(f"{name} must be a string or None: {value!r}")

    @property
    def has_interface_jar(self) -> bool:
        return self.interface_jar is not None

    @property
    def has_source_jar(self) -> bool:
        return self.source_jar is not None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> JarGroup:
        """
        Deserialize one element of a ``jars``/``generated_jars`` array.

        Raises:
            KeyError: If ``jar`` is missing
            TypeError, ValueError: If a value has the wrong type
        """
        return cls(
            jar=data["jar"],
            interface_jar=data.get("interface_jar"),
            source_jar=data.get("srcjar"),
        )

    def to_dict(self) -> dict[str, str]:
        d = {"jar": self.jar}
        if self.interface_jar is not None:
            d["interface_jar"] = self.interface_jar
        if self.source_jar is not None:
            d["srcjar"] = self.source_jar
        return d

    def __str__(self) -> str:
        text = f"JarGroup(jar = {self.jar}"
        if self.interface_jar is not None:
            text += f", ijar = {self.interface_jar}"
        if self.source_jar is not None:
            text += f", srcjar = {self.source_jar}"
        return text + ")"
