"""
Type Reflection - Describes Python types as TypeDescriptor handles

Supports:
- Builtin scalars (bool, int, float, str, complex, bytes)
- ctypes fixed-width numerics (c_int8 ... c_uint64, c_float, c_double)
- typing generics (List, Sequence, Set, Tuple, Dict, Mapping, Optional, Annotated)
- Dataclasses with schema tags in field metadata
- Annotated classes (TypedDict, NamedTuple, plain classes)
- Opaque classes (datetime, Decimal, ...) as field-less records
- Values, reflected through their type
"""

import asyncio
import collections
import collections.abc
import ctypes
import dataclasses
import enum
import logging
import queue
import sys
import threading
import types
import typing
import weakref
from typing import Any, Dict, List, Optional

from .descriptor import FieldDescriptor, Kind, Primitive, TypeDescriptor
from .tags import is_embedded, tags_from_metadata

logger = logging.getLogger(__name__)


BUILTIN_PRIMITIVES = {
    bool: Primitive.BOOL,
    int: Primitive.INT,
    float: Primitive.FLOAT64,
    str: Primitive.STRING,
    complex: Primitive.COMPLEX128,
}

CTYPES_PRIMITIVES = {
    ctypes.c_bool: Primitive.BOOL,
    ctypes.c_int8: Primitive.INT8,
    ctypes.c_int16: Primitive.INT16,
    ctypes.c_int32: Primitive.INT32,
    ctypes.c_int64: Primitive.INT64,
    ctypes.c_uint8: Primitive.UINT8,
    ctypes.c_uint16: Primitive.UINT16,
    ctypes.c_uint32: Primitive.UINT32,
    ctypes.c_uint64: Primitive.UINT64,
    ctypes.c_float: Primitive.FLOAT32,
    ctypes.c_double: Primitive.FLOAT64,
    ctypes.c_char_p: Primitive.STRING,
    ctypes.c_wchar_p: Primitive.STRING,
}

SEQUENCE_ORIGINS = {
    list,
    set,
    frozenset,
    collections.deque,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Collection,
    collections.abc.Iterable,
}

MAPPING_ORIGINS = {
    dict,
    collections.OrderedDict,
    collections.defaultdict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
}

CHANNEL_TYPES = {queue.Queue, queue.SimpleQueue, asyncio.Queue}

FUNCTION_TYPES = {
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    collections.abc.Callable,
}

_UNION_TYPES = {typing.Union}
if hasattr(types, "UnionType"):
    _UNION_TYPES.add(types.UnionType)

# classes and typing aliases are held weakly so local classes can be collected;
# constructs that refuse weak references fall back to a plain dict
_cache: "weakref.WeakKeyDictionary[Any, TypeDescriptor]" = weakref.WeakKeyDictionary()
_strong_cache: Dict[Any, TypeDescriptor] = {}
_cache_lock = threading.RLock()


def qualified_name(tp: Any) -> str:
    """``module.QualName`` for classes; builtins keep their bare name"""
    module = getattr(tp, "__module__", "") or ""
    name = getattr(tp, "__qualname__", None) or getattr(tp, "__name__", None) or repr(tp)
    if module in ("builtins", ""):
        return name
    return f"{module}.{name}"


def display_name(tp: Any) -> str:
    """Declared name of a type, qualified by its enclosing scope when nested"""
    if isinstance(tp, type):
        return tp.__qualname__
    return str(tp).replace("typing.", "")


def invalid(name: str = "invalid") -> TypeDescriptor:
    return TypeDescriptor.of_primitive(Primitive.INVALID, name=name)


def reflect(obj: Any) -> TypeDescriptor:
    """
    Describe a type, typing construct or value

    Args:
        obj: A TypeDescriptor (returned as is), a class, a typing construct,
            or any value (described through its type)

    Returns:
        TypeDescriptor for the shape of ``obj``
    """
    if isinstance(obj, TypeDescriptor):
        return obj
    if _is_type_like(obj):
        return reflect_type(obj)
    return _reflect_value(obj)


def reflect_type(tp: Any) -> TypeDescriptor:
    """Describe a class or typing construct, memoised per type"""
    try:
        with _cache_lock:
            cached = _cache_get(tp)
    except TypeError:
        # unhashable typing construct
        return _describe(tp)

    if cached is not None:
        return cached

    with _cache_lock:
        cached = _cache_get(tp)
        if cached is None:
            cached = _describe(tp)
            _cache_set(tp, cached)
    return cached


def clear_cache() -> None:
    with _cache_lock:
        _cache.clear()
        _strong_cache.clear()


def _cache_get(tp: Any):
    try:
        return _cache.get(tp)
    except TypeError:
        return _strong_cache.get(tp)


def _cache_set(tp: Any, descriptor: TypeDescriptor) -> None:
    try:
        _cache[tp] = descriptor
    except TypeError:
        _strong_cache[tp] = descriptor


def _is_type_like(obj: Any) -> bool:
    if isinstance(obj, type):
        return True
    if obj is typing.Any or obj is None or isinstance(obj, (typing.TypeVar, typing.ForwardRef)):
        return True
    if typing.get_origin(obj) is not None:
        return True
    return _is_new_type(obj)


def _is_new_type(obj: Any) -> bool:
    """typing.NewType is a function before 3.10 and a class afterwards"""
    if isinstance(obj, types.FunctionType) or type(obj).__name__ == "NewType":
        return hasattr(obj, "__supertype__")
    return False


def _reflect_value(value: Any) -> TypeDescriptor:
    """Values of builtin containers are described from their first element"""
    if type(value) in (list, tuple, set, frozenset) and value:
        elem = reflect(next(iter(value)))
        return TypeDescriptor.sequence_of(elem, name=f"{type(value).__name__}[{elem.name}]")
    if type(value) is dict and value:
        elem = reflect(next(iter(value.values())))
        return TypeDescriptor.mapping_of(elem, name=f"dict[str, {elem.name}]")
    return reflect_type(type(value))


def _describe(tp: Any) -> TypeDescriptor:
    if tp is None or tp is type(None):
        return invalid("None")
    if tp is typing.Any:
        return invalid("Any")
    if isinstance(tp, typing.TypeVar):
        return invalid(tp.__name__)
    if isinstance(tp, (str, typing.ForwardRef)):
        # unresolved forward reference
        return invalid(getattr(tp, "__forward_arg__", tp))
    if _is_new_type(tp):
        return reflect_type(tp.__supertype__)

    origin = typing.get_origin(tp)
    if origin is not None:
        return _describe_generic(tp, origin, typing.get_args(tp))

    if tp in BUILTIN_PRIMITIVES:
        return TypeDescriptor.of_primitive(BUILTIN_PRIMITIVES[tp], name=tp.__name__, qualified_name=qualified_name(tp))
    if tp in CTYPES_PRIMITIVES:
        return TypeDescriptor.of_primitive(
            CTYPES_PRIMITIVES[tp], name=tp.__name__, qualified_name=qualified_name(tp)
        )
    if tp in (bytes, bytearray):
        return TypeDescriptor.sequence_of(TypeDescriptor.of_primitive(Primitive.UINT8), name=tp.__name__)
    if tp in (list, tuple, set, frozenset):
        return TypeDescriptor.sequence_of(invalid(), name=tp.__name__)
    if tp is dict:
        return TypeDescriptor.mapping_of(invalid(), name=tp.__name__)
    if tp in FUNCTION_TYPES:
        return TypeDescriptor.of_primitive(Primitive.FUNC, qualified_name=qualified_name(tp))
    if tp in CHANNEL_TYPES:
        return TypeDescriptor.of_primitive(Primitive.CHAN, qualified_name=qualified_name(tp))

    if isinstance(tp, type):
        scalar = _scalar_subclass(tp)
        if scalar is not None:
            return TypeDescriptor.of_primitive(scalar, name=tp.__qualname__, qualified_name=qualified_name(tp))
        # the loader must not keep the class alive through the cache entry
        cls_ref = weakref.ref(tp)
        return TypeDescriptor.record(
            display_name(tp),
            qualified_name=qualified_name(tp),
            field_loader=lambda: _load_fields(cls_ref()),
        )

    logger.debug(f"Unsupported type shape: {tp!r}")
    return invalid(repr(tp))


def _scalar_subclass(tp: type):
    """Enums and subclasses of builtin scalars keep their scalar shape"""
    if issubclass(tp, enum.Enum):
        for base, primitive in BUILTIN_PRIMITIVES.items():
            if issubclass(tp, base):
                return primitive
        return Primitive.STRING
    for base in (bool, int, float, str, complex):
        if issubclass(tp, base):
            return BUILTIN_PRIMITIVES[base]
    return None


def _describe_generic(tp: Any, origin: Any, args: tuple) -> TypeDescriptor:
    if origin is typing.Annotated:
        return reflect_type(args[0])

    if origin in _UNION_TYPES:
        members = [a for a in args if a is not type(None)]
        if len(members) == 1 and len(members) != len(args):
            return TypeDescriptor.pointer_to(reflect_type(members[0]))
        return invalid(display_name(tp))

    if origin is typing.Literal:
        return reflect_type(type(args[0])) if args else invalid("Literal")

    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            elem = reflect_type(args[0])
        elif args and all(a == args[0] for a in args):
            elem = reflect_type(args[0])
        else:
            elem = invalid()
        return TypeDescriptor.sequence_of(elem, name=f"tuple[{elem.name}]")

    if origin in SEQUENCE_ORIGINS:
        elem = reflect_type(args[0]) if args else invalid()
        return TypeDescriptor.sequence_of(elem, name=f"{origin.__name__}[{elem.name}]")

    if origin in MAPPING_ORIGINS:
        key = reflect_type(args[0]) if args else invalid()
        elem = reflect_type(args[1]) if len(args) > 1 else invalid()
        return TypeDescriptor.mapping_of(elem, name=f"{origin.__name__}[{key.name}, {elem.name}]")

    if origin in CHANNEL_TYPES:
        return TypeDescriptor.of_primitive(Primitive.CHAN, qualified_name=qualified_name(origin))

    if origin is collections.abc.Callable:
        return TypeDescriptor.of_primitive(Primitive.FUNC)

    if isinstance(origin, type):
        # user generic class, e.g. Page[Item]
        return reflect_type(origin)

    return invalid(display_name(tp))


def _local_namespace(cls: type) -> Dict[str, Any]:
    """Names a class declared in a function can see besides its module globals"""
    localns = {name: value for name, value in vars(cls).items() if isinstance(value, type)}
    localns[cls.__name__] = cls
    return localns


def _type_hints(cls: type) -> Dict[str, Any]:
    localns = _local_namespace(cls)
    try:
        return typing.get_type_hints(cls, localns=localns)
    except (NameError, TypeError) as e:
        logger.debug(f"Could not resolve all annotations of {cls.__qualname__}: {e}")

    # resolve field by field so one bad annotation only affects its own field
    hints: Dict[str, Any] = {}
    for base in reversed(cls.__mro__):
        for name, annotation in (vars(base).get("__annotations__") or {}).items():
            hints[name] = _resolve_annotation(annotation, base.__module__, localns)
    return hints


def _resolve_annotation(annotation: Any, module: str, localns: Dict[str, Any]) -> Any:
    holder = type("_Annotation", (), {"__annotations__": {"value": annotation}, "__module__": module})
    globalns = vars(sys.modules[module]) if module in sys.modules else {}
    try:
        return typing.get_type_hints(holder, globalns=globalns, localns=localns)["value"]
    except (NameError, TypeError) as e:
        logger.debug(f"Unresolved annotation {annotation!r}: {e}")
        return annotation


def _load_fields(cls: Optional[type]) -> List[FieldDescriptor]:
    if cls is None:
        # class was garbage collected
        return []
    hints = _type_hints(cls)

    if dataclasses.is_dataclass(cls):
        return [
            FieldDescriptor(
                name=f.name,
                type=reflect_type(hints.get(f.name, f.type)),
                tags=tags_from_metadata(f.metadata),
                embedded=is_embedded(f.metadata),
            )
            for f in dataclasses.fields(cls)
        ]

    fields = []
    for name, tp in hints.items():
        if typing.get_origin(tp) is typing.ClassVar or tp is typing.ClassVar:
            continue
        fields.append(FieldDescriptor(name=name, type=reflect_type(tp)))
    return fields
