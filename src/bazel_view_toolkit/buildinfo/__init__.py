"""
Module: buildinfo

Purpose:
    Load the JSON files written by the IDE build-info aspect.

Key Functions:
    - load_build_infos(): Label -> BuildInfo mapping from many files
    - parse_build_info(): Parse a single file
    - parse_build_info_from_dict(): Decode an already loaded object
    - parse_jar_group(): Decode one jars array element

Dependencies:
    - bazel_view_toolkit.core.models: BuildInfo, JarGroup
    - bazel_view_toolkit.core.schemas: Shape validation
"""

from .loader import load_build_infos
from .parser import (
    BuildInfoDecodeError,
    parse_build_info,
    parse_build_info_from_dict,
    parse_jar_group,
)

__all__ = [
    "load_build_infos",
    "parse_build_info",
    "parse_build_info_from_dict",
    "parse_jar_group",
    "BuildInfoDecodeError",
]
