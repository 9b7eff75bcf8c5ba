from .models import (
    DEFINITIONS_PREFIX,
    NamedObject,
    ObjectGraph,
    Property,
    Schema,
    make_name,
    make_ref,
)

__all__ = [
    "DEFINITIONS_PREFIX",
    "NamedObject",
    "ObjectGraph",
    "Property",
    "Schema",
    "make_name",
    "make_ref",
]
