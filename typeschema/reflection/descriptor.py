"""
Type Descriptors - Read-only handles describing the shape of a runtime type

A descriptor is one of a small fixed set of shapes:
- primitive (bool, sized ints/floats, string, ...)
- pointer (optional indirection to another descriptor)
- record (ordered named fields)
- sequence (element descriptor)
- mapping (value descriptor)
"""

from dataclasses import dataclass, field as dataclass_field
from typing import Callable, Dict, List, Optional
from enum import Enum


class Kind(str, Enum):
    """Structural shape of a type"""
    PRIMITIVE = "primitive"
    POINTER = "pointer"
    RECORD = "record"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


class Primitive(str, Enum):
    """Host scalar shapes, labelled the way they appear in scalar object names"""
    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    COMPLEX64 = "complex64"
    COMPLEX128 = "complex128"
    STRING = "string"
    FUNC = "func"
    CHAN = "chan"
    INVALID = "invalid"


@dataclass
class FieldDescriptor:
    """One declared field of a record"""
    name: str
    type: "TypeDescriptor"
    tags: Dict[str, str] = dataclass_field(default_factory=dict)
    embedded: bool = False

    def tag(self, key: str) -> str:
        """Tag value, or empty string when the tag is absent"""
        return self.tags.get(key, "")

    def has_tag(self, key: str) -> bool:
        return key in self.tags

    @property
    def exported(self) -> bool:
        """Leading underscore marks a field as private"""
        return bool(self.name) and not self.name.startswith("_")


@dataclass(eq=False)
class TypeDescriptor:
    """
    Opaque handle to a type shape

    Record fields may be supplied directly or through ``field_loader``, which
    is resolved on first access. Lazy resolution lets self-referential
    classes point back at their own descriptor.
    """
    kind: Kind
    name: str = ""
    qualified_name: str = ""
    primitive: Optional[Primitive] = None
    elem: Optional["TypeDescriptor"] = None
    field_loader: Optional[Callable[[], List[FieldDescriptor]]] = dataclass_field(default=None, repr=False)
    _fields: Optional[List[FieldDescriptor]] = dataclass_field(default=None, repr=False)

    @property
    def fields(self) -> List[FieldDescriptor]:
        if self._fields is None:
            self._fields = self.field_loader() if self.field_loader else []
        return self._fields

    def unwrap(self) -> "TypeDescriptor":
        """Follow pointer indirection to the first non-pointer descriptor"""
        t = self
        while t.kind == Kind.POINTER and t.elem is not None:
            t = t.elem
        return t

    def __str__(self) -> str:
        return self.qualified_name or self.name or self.kind.value

    # Constructors

    @classmethod
    def of_primitive(cls, primitive: Primitive, name: str = "", qualified_name: str = "") -> "TypeDescriptor":
        name = name or primitive.value
        return cls(Kind.PRIMITIVE, name=name, qualified_name=qualified_name or name, primitive=primitive)

    @classmethod
    def pointer_to(cls, elem: "TypeDescriptor") -> "TypeDescriptor":
        return cls(Kind.POINTER, name=f"*{elem.name}", qualified_name=f"*{elem}", elem=elem)

    @classmethod
    def sequence_of(cls, elem: "TypeDescriptor", name: str = "") -> "TypeDescriptor":
        name = name or f"list[{elem.name}]"
        return cls(Kind.SEQUENCE, name=name, qualified_name=name, elem=elem)

    @classmethod
    def mapping_of(cls, elem: "TypeDescriptor", name: str = "") -> "TypeDescriptor":
        name = name or f"dict[str, {elem.name}]"
        return cls(Kind.MAPPING, name=name, qualified_name=name, elem=elem)

    @classmethod
    def record(
        cls,
        name: str,
        fields: Optional[List[FieldDescriptor]] = None,
        qualified_name: str = "",
        field_loader: Optional[Callable[[], List[FieldDescriptor]]] = None,
    ) -> "TypeDescriptor":
        return cls(
            Kind.RECORD,
            name=name,
            qualified_name=qualified_name or name,
            field_loader=field_loader,
            _fields=list(fields) if fields is not None else None,
        )
