"""Field tag helpers for dataclass fields."""
import dataclasses
from typing import Any, Dict, Iterable, Optional, Union

# Metadata key holding the tag dictionary inside ``dataclasses.field(metadata=...)``
TAGS_KEY = "schema"
EMBEDDED_KEY = "embedded"


def schema_field(
    json: Optional[str] = None,
    required: bool = False,
    example: Optional[str] = None,
    description: Optional[str] = None,
    desc: Optional[str] = None,
    enum: Optional[Union[str, Iterable[str]]] = None,
    **kwargs: Any,
):
    """
    Declare a dataclass field carrying schema tags

    Example:
    ```python
    @dataclass
    class Pet:
        name: str = schema_field(json="name,omitempty", example="Rex")
        tags: List[str] = schema_field(required=True, default_factory=list)
    ```

    Remaining keyword arguments go to ``dataclasses.field``.
    """
    tags: Dict[str, str] = {}
    if json is not None:
        tags["json"] = json
    if required:
        tags["required"] = ""
    if example is not None:
        tags["example"] = str(example)
    if description is not None:
        tags["description"] = description
    if desc is not None:
        tags["desc"] = desc
    if enum is not None:
        tags["enum"] = enum if isinstance(enum, str) else ",".join(str(v) for v in enum)

    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[TAGS_KEY] = {**metadata.get(TAGS_KEY, {}), **tags}
    return dataclasses.field(metadata=metadata, **kwargs)


def embedded(**kwargs: Any):
    """Declare a dataclass field whose fields are spliced into the parent"""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[EMBEDDED_KEY] = True
    return dataclasses.field(metadata=metadata, **kwargs)


def tags_from_metadata(metadata: Any) -> Dict[str, str]:
    """Extract string tags from dataclass field metadata"""
    if not metadata:
        return {}
    raw = metadata.get(TAGS_KEY, {})
    return {str(k): "" if v is None else str(v) for k, v in raw.items()}


def is_embedded(metadata: Any) -> bool:
    return bool(metadata) and bool(metadata.get(EMBEDDED_KEY, False))
