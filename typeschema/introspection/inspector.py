"""
Type Inspector - Derives schema properties and objects from type descriptors

Supports:
- Scalar kind and numeric format classification
- Record references instead of inlining
- Array/map element properties (nested to any depth)
- Field tags: json name, ",string" coercion, required, example, description/desc, enum
- Embedded records spliced into the parent
"""

import logging
from typing import Dict, List, Optional, Tuple

from typeschema.reflection.descriptor import FieldDescriptor, Kind, TypeDescriptor
from typeschema.schema.models import NamedObject, Property, make_name
from typeschema.types.classifier import ClassifierConfig, classify, classify_format, default_config, is_overridden
from typeschema.types.kinds import SchemaPrimitiveKind

logger = logging.getLogger(__name__)


class TypeInspector:
    """Builds properties and named objects for single types"""

    def __init__(self, config: Optional[ClassifierConfig] = None):
        """
        Initialize TypeInspector

        Args:
            config: Override registry; the process default when omitted
        """
        self.config = config or default_config

    def inspect(self, t: TypeDescriptor) -> Property:
        """
        Create the Property describing one type

        Records are never inlined: the property carries a reference to the
        record's derived name and no inline kind. Registry overrides win over
        the record shape.
        """
        t = t.unwrap()

        prop = Property(
            kind=classify(t, self.config),
            format=classify_format(t),
            descriptor=t,
        )

        if is_overridden(t, self.config):
            return prop

        if t.kind == Kind.RECORD:
            prop.reference = make_name(t)
            prop.kind = SchemaPrimitiveKind.UNKNOWN
        elif t.kind in (Kind.SEQUENCE, Kind.MAPPING) and t.elem is not None:
            prop.element = self.inspect(t.elem)
            if t.kind == Kind.SEQUENCE:
                # array properties describe their item type
                prop.descriptor = t.elem

        return prop

    def enumerate_fields(self, t: TypeDescriptor) -> Tuple[Dict[str, Property], List[str]]:
        """
        Extract the properties and required names of a record

        Returns:
            Tuple of ({field_name: Property}, [required field names])
        """
        properties: Dict[str, Property] = {}
        required: List[str] = []

        t = t.unwrap()
        if t.kind != Kind.RECORD:
            return properties, required

        for f in t.fields:
            # skip private fields
            if not f.exported:
                continue

            if f.embedded:
                # required names of embedded records are not carried over
                embedded_props, _ = self.enumerate_fields(f.type)
                properties.update(embedded_props)
                continue

            name = self._field_name(f)
            if name == "-":
                continue

            if ",string" in f.tag("json"):
                prop = Property(kind=SchemaPrimitiveKind.STRING, descriptor=f.type)
            else:
                prop = self.inspect(f.type)

            self._apply_tags(f, name, prop, required)
            properties[name] = prop

        return properties, required

    def define_object(self, t: TypeDescriptor) -> NamedObject:
        """Create the named schema object for one type"""
        t = t.unwrap()

        if t.kind == Kind.SEQUENCE:
            return NamedObject(
                name=make_name(t),
                kind=SchemaPrimitiveKind.ARRAY,
                element=self._element(t),
                descriptor=t,
            )

        if t.kind == Kind.MAPPING:
            return NamedObject(
                name=make_name(t),
                kind=SchemaPrimitiveKind.OBJECT,
                element=self._element(t),
                descriptor=t,
            )

        if t.kind == Kind.RECORD and not is_overridden(t, self.config):
            properties, required = self.enumerate_fields(t)
            return NamedObject(
                name=make_name(t),
                kind=SchemaPrimitiveKind.OBJECT,
                required=required,
                properties=properties,
                descriptor=t,
            )

        # scalar wrapper, named after the type's own label
        prop = self.inspect(t)
        label = t.primitive.value if t.primitive is not None else make_name(t)
        return NamedObject(name=label, kind=prop.kind, format=prop.format, descriptor=t)

    def _element(self, t: TypeDescriptor) -> Property:
        if t.elem is None:
            return Property()
        return self.inspect(t.elem)

    @staticmethod
    def _field_name(f: FieldDescriptor) -> str:
        """External name from the json tag, falling back to the declared name"""
        tag = f.tag("json").strip()
        if tag == "" or tag.startswith(","):
            return f.name
        # strip out things like ,omitempty
        return tag.split(",")[0]

    @staticmethod
    def _apply_tags(f: FieldDescriptor, name: str, prop: Property, required: List[str]) -> None:
        if f.has_tag("required") and name not in required:
            required.append(name)
        if f.tag("example"):
            prop.example = f.tag("example")
        if f.tag("description"):
            prop.description = f.tag("description")
        if f.tag("desc"):
            prop.description = f.tag("desc")
        if f.tag("enum"):
            prop.enum = f.tag("enum").split(",")
