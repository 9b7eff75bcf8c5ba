"""
Introspection Module

Derives Swagger-style definitions from Python types.
Supports:
- Record, array and map objects
- $ref references between records
- Recursive and mutually recursive records
- Field tags for naming, required-ness, examples, descriptions and enums
"""

from .graph import build_graph, derive_schema, merge_definitions
from .inspector import TypeInspector

__all__ = [
    "TypeInspector",
    "build_graph",
    "derive_schema",
    "merge_definitions",
]
