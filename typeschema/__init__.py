"""
typeschema - Swagger definitions derived from Python type shapes
"""

from typeschema.introspection import TypeInspector, build_graph, derive_schema, merge_definitions
from typeschema.reflection import TypeDescriptor, embedded, reflect, schema_field
from typeschema.schema import NamedObject, Property, Schema, make_ref
from typeschema.types import (
    ClassifierConfig,
    FormatTag,
    SchemaPrimitiveKind,
    classify,
    classify_format,
    classify_name,
    register_override,
)

__version__ = "0.1.0"

__all__ = [
    "ClassifierConfig",
    "FormatTag",
    "NamedObject",
    "Property",
    "Schema",
    "SchemaPrimitiveKind",
    "TypeDescriptor",
    "TypeInspector",
    "build_graph",
    "classify",
    "classify_format",
    "classify_name",
    "derive_schema",
    "embedded",
    "make_ref",
    "merge_definitions",
    "reflect",
    "register_override",
    "schema_field",
]
