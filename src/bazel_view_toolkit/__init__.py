"""Top-level package for the Bazel view toolkit.

Provides subpackages:
- bazel_view_toolkit.core – immutable models and the build-info schema
- bazel_view_toolkit.projectview – project view (.bazelproject) parsing
- bazel_view_toolkit.buildinfo – IDE build-info JSON loading
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text().splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.1.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("bazel-view-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()

from bazel_view_toolkit.buildinfo import BuildInfoDecodeError, load_build_infos
from bazel_view_toolkit.config import ToolkitConfig
from bazel_view_toolkit.core.models import BuildInfo, JarGroup, ProjectView
from bazel_view_toolkit.projectview import (
    CyclicImportError,
    ProjectViewBuilder,
    ProjectViewParseError,
    parse_project_view,
)

__all__: list[str] = [
    "__version__",
    "BuildInfo",
    "BuildInfoDecodeError",
    "CyclicImportError",
    "JarGroup",
    "ProjectView",
    "ProjectViewBuilder",
    "ProjectViewParseError",
    "ToolkitConfig",
    "load_build_infos",
    "parse_project_view",
]
