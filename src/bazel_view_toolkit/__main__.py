"""
Command-line inspection of project views and build-info files.

Usage:
    python -m bazel_view_toolkit view ide/project.bazelproject
    python -m bazel_view_toolkit build-info bazel-bin/a.java-info.json ...
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

import requests

from bazel_view_toolkit import __version__
from bazel_view_toolkit.buildinfo import BuildInfoDecodeError, load_build_infos
from bazel_view_toolkit.config import ToolkitConfig
from bazel_view_toolkit.projectview import ProjectViewParseError, parse_project_view

logger = logging.getLogger("bazel_view_toolkit")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bazel_view_toolkit",
        description="Inspect Bazel project views and IDE build-info files",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--encoding", default="utf-8", help="Encoding of input files")

    subparsers = parser.add_subparsers(dest="command", required=True)

    view = subparsers.add_parser("view", help="Parse a project view and print it as JSON")
    view.add_argument("source", help="Project view file or http(s) URL")
    view.add_argument("--timeout", type=float, default=None, help="URL timeout in seconds")
    view.add_argument(
        "--no-cycle-check", action="store_true",
        help="Do not fail on cyclic imports",
    )

    info = subparsers.add_parser("build-info", help="Load build-info JSON files")
    info.add_argument("files", nargs="+", help="Build-info JSON files")
    info.add_argument(
        "--no-schema", action="store_true",
        help="Skip JSON schema validation (basic checks still run)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    try:
        if args.command == "view":
            config = ToolkitConfig(
                encoding=args.encoding,
                detect_import_cycles=not args.no_cycle_check,
                url_timeout=args.timeout,
            )
            view = parse_project_view(args.source, config=config)
            print(json.dumps(view.to_dict(), indent=2))
        else:
            config = ToolkitConfig(encoding=args.encoding, strict_schema=not args.no_schema)
            infos = load_build_infos(args.files, config=config)
            print(json.dumps({label: info.to_dict() for label, info in infos.items()}, indent=2))
    except (ProjectViewParseError, BuildInfoDecodeError) as e:
        logger.error(str(e))
        return 1
    except (OSError, UnicodeDecodeError, requests.RequestException) as e:
        logger.error(f"Cannot read input: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
