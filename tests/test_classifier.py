"""
Unit tests for the scalar and format classifiers

Tests:
- Structural classification of every descriptor shape
- Pointer unwrapping
- Override registry precedence and defaults
- Numeric width formats
"""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Dict, List

from typeschema.reflection.descriptor import Kind, Primitive, TypeDescriptor
from typeschema.reflection.reflect import reflect
from typeschema.types.classifier import (
    ClassifierConfig,
    classify,
    classify_format,
    classify_name,
    register_override,
)
from typeschema.types.kinds import FormatTag, SchemaPrimitiveKind

from tests.sample_models import Pet


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def config():
    """Fresh config seeded with the default overrides"""
    return ClassifierConfig()


@pytest.fixture
def special_type():
    """Record that looks structural but should render as an integer"""
    return TypeDescriptor.record(
        "SpecialType",
        qualified_name="pkg.SpecialType",
        fields=[],
    )


# ============================================================================
# SCALAR CLASSIFIER
# ============================================================================


class TestClassify:
    """Test structural classification"""

    @pytest.mark.parametrize(
        "tp, expected",
        [
            (bool, SchemaPrimitiveKind.BOOLEAN),
            (int, SchemaPrimitiveKind.INTEGER),
            (float, SchemaPrimitiveKind.NUMBER),
            (str, SchemaPrimitiveKind.STRING),
            (List[int], SchemaPrimitiveKind.ARRAY),
            (Dict[str, int], SchemaPrimitiveKind.OBJECT),
            (Pet, SchemaPrimitiveKind.OBJECT),
            (complex, SchemaPrimitiveKind.UNKNOWN),
        ],
    )
    def test_builtin_types(self, config, tp, expected):
        assert classify(reflect(tp), config) == expected

    @pytest.mark.parametrize(
        "primitive",
        [
            Primitive.INT8,
            Primitive.INT16,
            Primitive.INT32,
            Primitive.INT64,
            Primitive.UINT,
            Primitive.UINT8,
            Primitive.UINT16,
            Primitive.UINT32,
            Primitive.UINT64,
        ],
    )
    def test_all_integer_widths(self, config, primitive):
        assert classify(TypeDescriptor.of_primitive(primitive), config) == SchemaPrimitiveKind.INTEGER

    @pytest.mark.parametrize("primitive", [Primitive.FUNC, Primitive.CHAN, Primitive.COMPLEX64, Primitive.INVALID])
    def test_unsupported_shapes_are_unknown(self, config, primitive):
        t = TypeDescriptor.of_primitive(primitive)
        assert classify(t, config) == SchemaPrimitiveKind.UNKNOWN
        assert classify_format(t) == FormatTag.NONE

    def test_pointer_to_pointer_is_unwrapped(self, config):
        t = TypeDescriptor.pointer_to(TypeDescriptor.pointer_to(TypeDescriptor.of_primitive(Primitive.INT64)))
        assert t.kind == Kind.POINTER
        assert classify(t, config) == SchemaPrimitiveKind.INTEGER
        assert classify_format(t) == FormatTag.INT64

    def test_pointer_to_sequence(self, config):
        t = TypeDescriptor.pointer_to(reflect(List[int]))
        assert classify(t, config) == SchemaPrimitiveKind.ARRAY

    def test_callable_is_unknown(self, config):
        assert classify(reflect(lambda: None), config) == SchemaPrimitiveKind.UNKNOWN

    def test_default_config_is_used_when_omitted(self):
        assert classify(reflect(str)) == SchemaPrimitiveKind.STRING


class TestOverrides:
    """Test the override registry"""

    def test_defaults(self, config):
        assert classify(reflect(datetime), config) == SchemaPrimitiveKind.STRING
        assert classify(reflect(date), config) == SchemaPrimitiveKind.STRING
        assert classify(reflect(timedelta), config) == SchemaPrimitiveKind.INTEGER
        assert classify(reflect(Decimal), config) == SchemaPrimitiveKind.NUMBER

    def test_override_beats_structure(self, config, special_type):
        assert classify(special_type, config) == SchemaPrimitiveKind.OBJECT

        config.register("pkg.SpecialType", "integer")

        assert classify(special_type, config) == SchemaPrimitiveKind.INTEGER
        assert classify(TypeDescriptor.pointer_to(special_type), config) == SchemaPrimitiveKind.INTEGER

    def test_override_does_not_change_format(self, config):
        config.register("float", SchemaPrimitiveKind.STRING)
        assert classify(reflect(float), config) == SchemaPrimitiveKind.STRING
        assert classify_format(reflect(float)) == FormatTag.DOUBLE

    def test_get_missing_is_unknown(self, config):
        assert config.get("nope.Missing") == SchemaPrimitiveKind.UNKNOWN

    def test_register_rejects_unknown_kind(self, config):
        with pytest.raises(ValueError):
            config.register("pkg.Thing", "timestamp")

    def test_without_defaults(self):
        config = ClassifierConfig(include_defaults=False)
        assert config.get("datetime.datetime") == SchemaPrimitiveKind.UNKNOWN
        assert classify(reflect(datetime), config) == SchemaPrimitiveKind.OBJECT

    def test_copy_is_independent(self, config):
        clone = config.copy()
        clone.register("pkg.Only", "string")
        assert clone.get("pkg.Only") == SchemaPrimitiveKind.STRING
        assert config.get("pkg.Only") == SchemaPrimitiveKind.UNKNOWN

    def test_configs_do_not_share_state(self, special_type):
        first = ClassifierConfig({"pkg.SpecialType": "integer"})
        second = ClassifierConfig()
        assert classify(special_type, first) == SchemaPrimitiveKind.INTEGER
        assert classify(special_type, second) == SchemaPrimitiveKind.OBJECT

    def test_process_default_registry(self):
        register_override("tests.process.Opaque", "number")
        assert classify_name("tests.process.Opaque") == SchemaPrimitiveKind.NUMBER


# ============================================================================
# FORMAT CLASSIFIER
# ============================================================================


class TestClassifyFormat:
    """Test numeric width formats"""

    @pytest.mark.parametrize(
        "primitive, expected",
        [
            (Primitive.INT, FormatTag.INT32),
            (Primitive.INT8, FormatTag.INT32),
            (Primitive.INT16, FormatTag.INT32),
            (Primitive.INT32, FormatTag.INT32),
            (Primitive.UINT8, FormatTag.INT32),
            (Primitive.UINT16, FormatTag.INT32),
            (Primitive.UINT32, FormatTag.INT32),
            (Primitive.INT64, FormatTag.INT64),
            (Primitive.UINT64, FormatTag.INT64),
            (Primitive.FLOAT32, FormatTag.FLOAT),
            (Primitive.FLOAT64, FormatTag.DOUBLE),
            (Primitive.UINT, FormatTag.NONE),
            (Primitive.STRING, FormatTag.NONE),
            (Primitive.BOOL, FormatTag.NONE),
        ],
    )
    def test_widths(self, primitive, expected):
        assert classify_format(TypeDescriptor.of_primitive(primitive)) == expected

    def test_non_primitive_has_no_format(self):
        assert classify_format(reflect(List[int])) == FormatTag.NONE
        assert classify_format(reflect(Pet)) == FormatTag.NONE


class TestKinds:
    """Test kind parsing"""

    def test_parse(self):
        assert SchemaPrimitiveKind.parse("Integer") == SchemaPrimitiveKind.INTEGER
        assert SchemaPrimitiveKind.parse("unknown") == SchemaPrimitiveKind.UNKNOWN
        assert SchemaPrimitiveKind.parse("") == SchemaPrimitiveKind.UNKNOWN

    def test_str(self):
        assert str(SchemaPrimitiveKind.ARRAY) == "array"
        assert str(FormatTag.INT64) == "int64"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
