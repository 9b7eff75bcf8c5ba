"""
Types Module

Classifies type shapes into schema primitive kinds and numeric formats.
"""

from .classifier import (
    ClassifierConfig,
    DEFAULT_OVERRIDES,
    classify,
    classify_format,
    classify_name,
    default_config,
    is_overridden,
    register_override,
)
from .kinds import FormatTag, SchemaPrimitiveKind

__all__ = [
    "ClassifierConfig",
    "DEFAULT_OVERRIDES",
    "FormatTag",
    "SchemaPrimitiveKind",
    "classify",
    "classify_format",
    "classify_name",
    "default_config",
    "is_overridden",
    "register_override",
]
