"""Schema primitive kinds and numeric format tags."""
from enum import Enum


class SchemaPrimitiveKind(str, Enum):
    """Primitive types of a schema property"""
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    UNKNOWN = ""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "SchemaPrimitiveKind":
        """Parse a kind name such as ``"integer"``; raises ValueError on unknown names"""
        text = value.strip().lower()
        if text in ("", "unknown"):
            return cls.UNKNOWN
        return cls(text)


class FormatTag(str, Enum):
    """Numeric width refinement, meaningful for integer and number kinds"""
    NONE = ""
    INT32 = "int32"
    INT64 = "int64"
    FLOAT = "float"
    DOUBLE = "double"

    def __str__(self) -> str:
        return self.value
