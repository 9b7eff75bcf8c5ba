"""
Scalar and Format Classifiers

Maps a TypeDescriptor to the schema primitive kind and numeric format used
in a derived property. Host types listed in the override registry are
treated as opaque scalars regardless of their structure.
"""

import logging
import threading
from typing import Dict, Optional, Union

from typeschema.reflection.descriptor import Kind, Primitive, TypeDescriptor

from .kinds import FormatTag, SchemaPrimitiveKind

logger = logging.getLogger(__name__)


DEFAULT_OVERRIDES: Dict[str, SchemaPrimitiveKind] = {
    "datetime.datetime": SchemaPrimitiveKind.STRING,
    "datetime.date": SchemaPrimitiveKind.STRING,
    "datetime.time": SchemaPrimitiveKind.STRING,
    "datetime.timedelta": SchemaPrimitiveKind.INTEGER,
    "decimal.Decimal": SchemaPrimitiveKind.NUMBER,
}

INTEGER_PRIMITIVES = {
    Primitive.INT,
    Primitive.INT8,
    Primitive.INT16,
    Primitive.INT32,
    Primitive.INT64,
    Primitive.UINT,
    Primitive.UINT8,
    Primitive.UINT16,
    Primitive.UINT32,
    Primitive.UINT64,
}

FLOAT_PRIMITIVES = {Primitive.FLOAT32, Primitive.FLOAT64}

FORMATS = {
    Primitive.INT: FormatTag.INT32,
    Primitive.INT8: FormatTag.INT32,
    Primitive.INT16: FormatTag.INT32,
    Primitive.INT32: FormatTag.INT32,
    Primitive.UINT8: FormatTag.INT32,
    Primitive.UINT16: FormatTag.INT32,
    Primitive.UINT32: FormatTag.INT32,
    Primitive.INT64: FormatTag.INT64,
    Primitive.UINT64: FormatTag.INT64,
    Primitive.FLOAT64: FormatTag.DOUBLE,
    Primitive.FLOAT32: FormatTag.FLOAT,
}


class ClassifierConfig:
    """
    Override registry consulted before structural classification

    Usage:
    ```python
    config = ClassifierConfig()
    config.register("uuid.UUID", "string")
    schema = derive_schema(Order, config)
    ```
    """

    def __init__(
        self,
        overrides: Optional[Dict[str, Union[str, SchemaPrimitiveKind]]] = None,
        include_defaults: bool = True,
    ):
        """
        Initialize ClassifierConfig

        Args:
            overrides: Extra ``{qualified_name: kind}`` entries
            include_defaults: Seed with the datetime/Decimal defaults
        """
        self._lock = threading.RLock()
        self._overrides: Dict[str, SchemaPrimitiveKind] = dict(DEFAULT_OVERRIDES) if include_defaults else {}
        for name, kind in (overrides or {}).items():
            self.register(name, kind)

    def register(self, qualified_name: str, kind: Union[str, SchemaPrimitiveKind]) -> None:
        """Treat ``qualified_name`` as an opaque scalar of ``kind``"""
        if not isinstance(kind, SchemaPrimitiveKind):
            kind = SchemaPrimitiveKind.parse(kind)
        with self._lock:
            self._overrides[qualified_name] = kind
        logger.debug(f"Registered override {qualified_name} -> {kind.name.lower()}")

    def get(self, qualified_name: str) -> SchemaPrimitiveKind:
        """Override for ``qualified_name``, UNKNOWN when none is registered"""
        with self._lock:
            return self._overrides.get(qualified_name, SchemaPrimitiveKind.UNKNOWN)

    def overrides(self) -> Dict[str, SchemaPrimitiveKind]:
        with self._lock:
            return dict(self._overrides)

    def copy(self) -> "ClassifierConfig":
        return ClassifierConfig(self.overrides(), include_defaults=False)


default_config = ClassifierConfig()


def register_override(qualified_name: str, kind: Union[str, SchemaPrimitiveKind]) -> None:
    """Register an override on the process default config"""
    default_config.register(qualified_name, kind)


def classify_name(qualified_name: str) -> SchemaPrimitiveKind:
    """Look up an override on the process default config"""
    return default_config.get(qualified_name)


def classify(t: TypeDescriptor, config: Optional[ClassifierConfig] = None) -> SchemaPrimitiveKind:
    """Schema primitive kind of ``t``; total, UNKNOWN for unsupported shapes"""
    config = config or default_config
    t = t.unwrap()

    override = config.get(t.qualified_name)
    if override != SchemaPrimitiveKind.UNKNOWN:
        return override

    if t.kind == Kind.SEQUENCE:
        return SchemaPrimitiveKind.ARRAY
    if t.kind in (Kind.RECORD, Kind.MAPPING):
        return SchemaPrimitiveKind.OBJECT
    if t.kind != Kind.PRIMITIVE:
        return SchemaPrimitiveKind.UNKNOWN

    if t.primitive == Primitive.BOOL:
        return SchemaPrimitiveKind.BOOLEAN
    if t.primitive in INTEGER_PRIMITIVES:
        return SchemaPrimitiveKind.INTEGER
    if t.primitive in FLOAT_PRIMITIVES:
        return SchemaPrimitiveKind.NUMBER
    if t.primitive == Primitive.STRING:
        return SchemaPrimitiveKind.STRING
    return SchemaPrimitiveKind.UNKNOWN


def is_overridden(t: TypeDescriptor, config: Optional[ClassifierConfig] = None) -> bool:
    config = config or default_config
    return config.get(t.unwrap().qualified_name) != SchemaPrimitiveKind.UNKNOWN


def classify_format(t: TypeDescriptor) -> FormatTag:
    """Numeric width hint of ``t``; ignores the override registry"""
    t = t.unwrap()
    if t.kind != Kind.PRIMITIVE:
        return FormatTag.NONE
    return FORMATS.get(t.primitive, FormatTag.NONE)
