"""
Graph Closure - Collects every schema object reachable from a root type

Objects are keyed by derived name and inserted once. Passes over the graph
repeat until one of them discovers nothing new, so recursive and mutually
recursive records terminate.
"""

import logging
from typing import Any, Optional, Tuple

from typeschema.reflection.descriptor import TypeDescriptor
from typeschema.reflection.reflect import reflect
from typeschema.schema.models import DEFINITIONS_PREFIX, ObjectGraph, Schema, make_ref
from typeschema.types.classifier import ClassifierConfig
from typeschema.types.kinds import SchemaPrimitiveKind

from .inspector import TypeInspector

logger = logging.getLogger(__name__)


def build_graph(root: Any, config: Optional[ClassifierConfig] = None) -> ObjectGraph:
    """
    Derive the root object and every record it references

    Args:
        root: Value, class, typing construct or TypeDescriptor
        config: Override registry; the process default when omitted

    Returns:
        Dictionary of derived name -> NamedObject without dangling references
    """
    _, graph = _close(TypeInspector(config), reflect(root))
    return graph


def _close(inspector: TypeInspector, root: TypeDescriptor) -> Tuple[str, ObjectGraph]:
    obj = inspector.define_object(root)
    graph: ObjectGraph = {obj.name: obj}

    passes = 0
    dirty = True
    while dirty:
        dirty = False
        passes += 1
        for current in list(graph.values()):
            for prop in current.all_properties():
                if not prop.reference or prop.reference in graph:
                    continue
                child = inspector.define_object(prop.descriptor)
                graph[child.name] = child
                dirty = True
                logger.debug(f"Discovered {child.name} via {current.name}")

    for current in graph.values():
        for prop in current.all_properties():
            if prop.kind == SchemaPrimitiveKind.UNKNOWN and not prop.reference:
                logger.debug(f"{current.name} holds a property of unsupported type {prop.descriptor}")

    logger.info(f"Derived {len(graph)} objects from {obj.name} in {passes} passes")
    return obj.name, graph


def derive_schema(
    prototype: Any,
    config: Optional[ClassifierConfig] = None,
    ref_prefix: str = DEFINITIONS_PREFIX,
) -> Schema:
    """
    Derive the schema of a value or type

    Usage:
    ```python
    schema = derive_schema(Pet)
    schema.ref          # "#/definitions/Pet"
    schema.definitions  # {"Pet": NamedObject(...), "Owner": NamedObject(...)}
    ```
    """
    name, definitions = _close(TypeInspector(config), reflect(prototype))
    return Schema(
        name=name,
        ref=make_ref(name, ref_prefix),
        definitions=definitions,
        prototype=prototype,
    )


def merge_definitions(target: ObjectGraph, graph: ObjectGraph) -> ObjectGraph:
    """Add objects of ``graph`` to a shared definitions table; existing names are kept"""
    for name, obj in graph.items():
        if name not in target:
            target[name] = obj
    return target
