"""
Field introspection for records (dataclasses and pydantic models).

Builds a static, per-type table of field descriptors: declaration position,
declared name, resolved static type, tag annotations, and the anonymous
(embedded) flag. The walker and resolver consume these descriptors and never
touch dataclass or pydantic internals directly.

Notes:
    - Declaration order follows ``dataclasses.fields()`` / ``model_fields``;
      inherited fields come first.
    - Tag annotations live in dataclass ``field(metadata=...)`` or in pydantic
      ``Field(json_schema_extra=...)`` under the tag key (e.g. ``"json"``).
    - A field is anonymous when its metadata carries ``EMBED_KEY`` set truthy.
    - Descriptor tables are cached per record class; records are treated as
      immutable type definitions.

Examples:
    >>> from dataclasses import dataclass
    >>> from tagmap.core.fields import describe, tagged
    >>> @dataclass
    ... class User:
    ...     name: str = tagged(json="name,omitempty")
    >>> [f.name for f in describe(User)]
    ['name']
    >>> describe(User)[0].annotation("json")
    'name,omitempty'
"""

from __future__ import annotations

import dataclasses
import sys
import typing
from collections.abc import Mapping
from dataclasses import MISSING, dataclass
from datetime import date
from functools import lru_cache
from types import MappingProxyType, SimpleNamespace
from typing import Any

from pydantic import BaseModel

from .constants import EMBED_KEY

__all__ = [
    "INSTANT_TYPES",
    "FieldDescriptor",
    "describe",
    "is_record",
    "is_record_type",
    "is_instant",
    "tagged",
    "embedded",
]

# Leaf "instant in time" types. datetime.datetime subclasses date.
INSTANT_TYPES: tuple[type, ...] = (date,)


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Immutable description of one declared record field.

    Attributes:
        name (str): Declared attribute name.
        position (int): Zero-based declaration index.
        type (Any): Resolved static annotation, or the raw string when it could not
            be resolved (forward reference to a class not visible at module level).
        tags (Mapping[str, Any]): Read-only field metadata (tag key -> annotation).
        anonymous (bool): True for embedded fields, which are always flattened.
    """

    name: str
    position: int
    type: Any
    tags: Mapping[str, Any]
    anonymous: bool = False

    def annotation(self, tag_key: str) -> str | None:
        """Return the raw annotation string under `tag_key`, or None when absent."""
        raw = self.tags.get(tag_key)
        return raw if isinstance(raw, str) else None

    @property
    def resolved(self) -> bool:
        return not isinstance(self.type, str)


def is_instant(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, INSTANT_TYPES)


def is_record_type(tp: Any) -> bool:
    """
    Check whether a type is a record class.

    Args:
        tp (Any): Candidate type (annotations like ``Optional[X]`` are not classes).

    Returns:
        bool: True for dataclass or pydantic model classes; instants are leaves.
    """
    if not isinstance(tp, type) or is_instant(tp):
        return False
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def is_record(value: Any) -> bool:
    """Check whether a value is a record instance (not a record class)."""
    return not isinstance(value, type) and is_record_type(type(value))


def describe(record: Any) -> tuple[FieldDescriptor, ...]:
    """
    Return the field descriptor table for a record instance or record class.

    Args:
        record (Any): Dataclass/pydantic instance or class.

    Returns:
        tuple[FieldDescriptor, ...]: Descriptors in declaration order.

    Raises:
        TypeError: If `record` is neither a record instance nor a record class.
    """
    cls = record if isinstance(record, type) else type(record)
    if not is_record_type(cls):
        raise TypeError(f"expected a dataclass or pydantic model, got {cls.__name__}")
    return _describe_type(cls)


# Bounded so dynamically built record classes are eventually released.
DESCRIBE_CACHE_SIZE: int = 512


@lru_cache(maxsize=DESCRIBE_CACHE_SIZE)
def _describe_type(cls: type) -> tuple[FieldDescriptor, ...]:
    if issubclass(cls, BaseModel):
        return _describe_model(cls)
    return _describe_dataclass(cls)


def _describe_dataclass(cls: type) -> tuple[FieldDescriptor, ...]:
    try:
        hints = typing.get_type_hints(cls)
    except (NameError, TypeError):
        hints = _field_hints(cls)
    out: list[FieldDescriptor] = []
    for pos, f in enumerate(dataclasses.fields(cls)):
        meta = MappingProxyType(dict(f.metadata))
        out.append(
            FieldDescriptor(
                name=f.name,
                position=pos,
                type=hints.get(f.name, f.type),
                tags=meta,
                anonymous=bool(meta.get(EMBED_KEY, False)),
            )
        )
    return tuple(out)


def _field_hints(cls: type) -> dict[str, Any]:
    """
    Resolve annotations one field at a time.

    Names that stay unresolvable (string references to local classes) are left
    out; the walker then classifies those fields by their runtime value.
    """
    globalns = getattr(sys.modules.get(cls.__module__), "__dict__", {})
    localns = dict(vars(cls))
    hints: dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        holder = SimpleNamespace(__annotations__={f.name: f.type})
        try:
            hints.update(typing.get_type_hints(holder, globalns=globalns, localns=localns))
        except (NameError, TypeError):
            continue
    return hints


def _describe_model(cls: type[BaseModel]) -> tuple[FieldDescriptor, ...]:
    out: list[FieldDescriptor] = []
    for pos, (name, info) in enumerate(cls.model_fields.items()):
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        meta = MappingProxyType(dict(extra))
        out.append(
            FieldDescriptor(
                name=name,
                position=pos,
                type=info.annotation,
                tags=meta,
                anonymous=bool(meta.get(EMBED_KEY, False)),
            )
        )
    return tuple(out)


def tagged(*, default: Any = MISSING, default_factory: Any = MISSING, **tags: str) -> Any:
    """
    Build a dataclass field carrying tag annotations.

    Args:
        default (Any): Field default, as for ``dataclasses.field``.
        default_factory (Any): Field default factory, as for ``dataclasses.field``.
        **tags (str): Annotation per tag key, e.g. ``json="name,omitempty"``.

    Returns:
        Any: A ``dataclasses.Field`` suitable as a class attribute default.

    Examples:
        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class Row:
        ...     zip_code: int = tagged(default=0, json="zip", db="zip_code")
        >>> Row().zip_code
        0
    """
    return dataclasses.field(default=default, default_factory=default_factory, metadata=dict(tags))


def embedded(*, default: Any = MISSING, default_factory: Any = MISSING, **tags: str) -> Any:
    """Build a dataclass field marked anonymous; its record is always flattened."""
    meta: dict[str, Any] = dict(tags)
    meta[EMBED_KEY] = True
    return dataclasses.field(default=default, default_factory=default_factory, metadata=meta)
