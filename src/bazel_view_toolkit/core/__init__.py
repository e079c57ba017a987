"""
Bazel View Toolkit Core Package

Shared data models and the build-info schema. Every model here is a frozen
dataclass; builders and loaders create new instances rather than mutating
existing ones.
"""

from .models import BuildInfo, JarGroup, ProjectView

__all__ = [
    "BuildInfo",
    "JarGroup",
    "ProjectView",
]
