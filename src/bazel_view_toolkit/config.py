"""
Module: config

Purpose:
    Configuration dataclass shared by the project view parser and the
    build-info loader. Immutable configuration with validation on
    construction.

Key Classes:
    - ToolkitConfig: Reading and validation settings

Dependencies:
    - dataclasses (std)

Used By:
    - projectview.builder: File encoding, URL timeout, cycle detection
    - buildinfo.parser: File encoding, schema strictness
    - buildinfo.loader: Passes config through to the parser
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ToolkitConfig:
    """
    Configuration for reading project views and build-info files (immutable).

    Attributes:
        encoding: Text encoding for project view and JSON files
        detect_import_cycles: Fail with CyclicImportError when a project view
            imports a file that is already being parsed
        url_timeout: Seconds to wait on a remote project view. None blocks
            until the server answers.
        strict_schema: Validate build-info documents against the bundled
            JSON schema before decoding

    Example:
        >>> config = ToolkitConfig(encoding="latin-1", url_timeout=5.0)
    """

    encoding: str = "utf-8"
    detect_import_cycles: bool = True
    url_timeout: Optional[float] = None
    strict_schema: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"Unknown encoding: {self.encoding!r}")
        if self.url_timeout is not None and self.url_timeout <= 0:
            raise ValueError(f"url_timeout must be positive: {self.url_timeout}")


DEFAULT_CONFIG = ToolkitConfig()
