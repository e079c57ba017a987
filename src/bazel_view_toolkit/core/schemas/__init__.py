"""
Schemas Package

JSON schema definition and validation for build-info documents.
"""

from .validator import (
    validate_build_info,
    validate_jar_group,
    SchemaValidationError,
    BUILD_INFO_REQUIRED_FIELDS,
    JAR_GROUP_REQUIRED_FIELDS,
)

__all__ = [
    "validate_build_info",
    "validate_jar_group",
    "SchemaValidationError",
    "BUILD_INFO_REQUIRED_FIELDS",
    "JAR_GROUP_REQUIRED_FIELDS",
]
