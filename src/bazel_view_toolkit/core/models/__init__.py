"""
Core Models Package

Immutable data models produced by the project view parser and the
build-info loader.

| Model | Produced by | Key |
|-------|-------------|-----|
| `ProjectView` | `projectview.ProjectViewBuilder.build()` | - |
| `JarGroup` | `BuildInfo.from_dict()` | all three fields |
| `BuildInfo` | `buildinfo.parse_build_info()` | `label` |
"""

from .project_view import ProjectView
from .jars import JarGroup
from .build_info import BuildInfo

__all__ = [
    "ProjectView",
    "JarGroup",
    "BuildInfo",
]
