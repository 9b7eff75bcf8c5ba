"""
Reflection Module

Describes Python types as read-only TypeDescriptor handles:
- Primitive, pointer, record, sequence and mapping shapes
- Dataclass field tags (json name, required, example, description, enum)
- Embedded fields spliced into their parent record
"""

from .descriptor import FieldDescriptor, Kind, Primitive, TypeDescriptor
from .reflect import clear_cache, qualified_name, reflect, reflect_type
from .tags import embedded, schema_field

__all__ = [
    "FieldDescriptor",
    "Kind",
    "Primitive",
    "TypeDescriptor",
    "clear_cache",
    "qualified_name",
    "reflect",
    "reflect_type",
    "embedded",
    "schema_field",
]
