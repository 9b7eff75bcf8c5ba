"""Models representing derived schema objects."""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from typeschema.reflection.descriptor import TypeDescriptor
from typeschema.types.kinds import FormatTag, SchemaPrimitiveKind

DEFINITIONS_PREFIX = "#/definitions/"

_LOCALS = re.compile(r"<locals>\.")
_INVALID_NAME_CHARS = re.compile(r"[^\w.]+")


def make_name(t: TypeDescriptor) -> str:
    """Derived name of a record or container, e.g. ``Pet`` or ``list_Pet``"""
    name = _LOCALS.sub("", t.name or t.kind.value)
    return _INVALID_NAME_CHARS.sub("_", name).strip("_")


def make_ref(name: str, prefix: str = DEFINITIONS_PREFIX) -> str:
    return f"{prefix}{name}"


@dataclass
class Property:
    """Schema fragment of one field or container element"""

    kind: SchemaPrimitiveKind = SchemaPrimitiveKind.UNKNOWN
    format: FormatTag = FormatTag.NONE
    reference: Optional[str] = None  # derived name of a record object
    element: Optional["Property"] = None  # items / additionalProperties
    example: Optional[str] = None
    description: Optional[str] = None
    enum: Optional[List[str]] = None
    descriptor: Optional[TypeDescriptor] = field(default=None, repr=False, compare=False)

    def elements(self):
        """This property followed by its element chain"""
        prop = self
        while prop is not None:
            yield prop
            prop = prop.element

    def to_dict(self, ref_prefix: str = DEFINITIONS_PREFIX) -> Dict[str, Any]:
        """Convert to Swagger property representation"""
        data: Dict[str, Any] = {}
        if self.reference:
            data["$ref"] = make_ref(self.reference, ref_prefix)
        if self.kind.value:
            data["type"] = self.kind.value
        if self.format.value:
            data["format"] = self.format.value
        if self.element is not None:
            key = "items" if self.kind == SchemaPrimitiveKind.ARRAY else "additionalProperties"
            data[key] = self.element.to_dict(ref_prefix)
        if self.example:
            data["example"] = self.example
        if self.description:
            data["description"] = self.description
        if self.enum:
            data["enum"] = list(self.enum)
        return data


@dataclass
class NamedObject:
    """One entry of the definitions table"""

    name: str
    kind: SchemaPrimitiveKind = SchemaPrimitiveKind.UNKNOWN
    format: FormatTag = FormatTag.NONE
    required: List[str] = field(default_factory=list)
    properties: Dict[str, Property] = field(default_factory=dict)
    element: Optional[Property] = None  # items for arrays, additionalProperties for maps
    descriptor: Optional[TypeDescriptor] = field(default=None, repr=False, compare=False)

    def all_properties(self):
        """Every property held by this object, element chains included"""
        if self.element is not None:
            yield from self.element.elements()
        for prop in self.properties.values():
            yield from prop.elements()

    def to_dict(self, ref_prefix: str = DEFINITIONS_PREFIX) -> Dict[str, Any]:
        """Convert to Swagger schema object representation"""
        data: Dict[str, Any] = {}
        if self.kind.value:
            data["type"] = self.kind.value
        if self.format.value:
            data["format"] = self.format.value
        if self.required:
            data["required"] = list(self.required)
        if self.properties:
            data["properties"] = {k: v.to_dict(ref_prefix) for k, v in self.properties.items()}
        if self.element is not None:
            key = "items" if self.kind == SchemaPrimitiveKind.ARRAY else "additionalProperties"
            data[key] = self.element.to_dict(ref_prefix)
        return data


ObjectGraph = Dict[str, NamedObject]


@dataclass
class Schema:
    """Root reference plus the definitions reachable from it"""

    name: str
    ref: str
    definitions: ObjectGraph = field(default_factory=dict)
    prototype: Any = field(default=None, repr=False, compare=False)

    @property
    def root(self) -> NamedObject:
        return self.definitions[self.name]

    def to_dict(self, ref_prefix: str = DEFINITIONS_PREFIX) -> Dict[str, Any]:
        """Convert to dictionary representation"""
        return {
            "$ref": self.ref,
            "definitions": {k: v.to_dict(ref_prefix) for k, v in sorted(self.definitions.items())},
        }
