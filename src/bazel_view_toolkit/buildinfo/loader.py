"""
Module: buildinfo.loader

Purpose:
    Aggregate build-info JSON files into a label -> BuildInfo mapping.

Key Functions:
    - load_build_infos(): Parse a list of files into a read-only mapping

Dependencies:
    - buildinfo.parser: Per-file decoding

Used By:
    - __main__: ``build-info`` command
"""

from __future__ import annotations

import logging
import os
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Union

from bazel_view_toolkit.config import ToolkitConfig
from bazel_view_toolkit.core.models import BuildInfo

from .parser import parse_build_info

logger = logging.getLogger(__name__)


def load_build_infos(
    paths: Iterable[Union[str, os.PathLike]],
    *,
    config: Optional[ToolkitConfig] = None,
) -> Mapping[str, BuildInfo]:
    """
    Load build-info files into a mapping keyed by target label.

    Files are read in order. Empty path entries are skipped, which lets
    callers pass the raw line list of a build output manifest. When two
    files carry the same label the later file wins; the earlier record is
    dropped with a warning.

    There is no partial result: the first unreadable or malformed file
    aborts the whole load.

    Args:
        paths: Build-info JSON files, in order
        config: Encoding and schema strictness

    Returns:
        Read-only mapping of label -> BuildInfo, in first-insertion order

    Raises:
        BuildInfoDecodeError: If any file is malformed
        OSError: If any file cannot be read

    Example:
        >>> infos = load_build_infos(["a.json", "", "b.json"])
        >>> sorted(infos)
        ['//a:a', '//b:b']
    """
    infos: Dict[str, BuildInfo] = {}
    for path in paths:
        if not os.fspath(path):
            continue
        info = parse_build_info(path, config=config)
        if info.label in infos:
            logger.warning(
                f"Duplicate build info for {info.label}: {path} replaces the earlier record"
            )
        infos[info.label] = info
        logger.debug(f"Loaded build info for {info.label} from {path}")

    logger.info(f"Loaded build info for {len(infos)} targets")
    return MappingProxyType(infos)
