"""
Core package aggregator for tagmap (introspection, emptiness, tags, walker, projection).

## Contracts (single source of truth)
- Fields — per-type descriptor tables for dataclasses and pydantic models.
- Emptiness — zero-value classification used by ``omitempty``.
- Resolver — annotation parsing and key resolution.
- Walker — record -> ``dict[str, Any]`` conversion with flattening.
- Projection — sorted keys and ordered value extraction.

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO.
- Dependency order (leaves first): fields -> emptiness -> resolver -> walker -> projection.
- Anonymous (embedded) fields are always flattened; ``flatten`` governs named ones.

## Examples
```python
from dataclasses import dataclass
from tagmap.core import tagged, to_map, tags, values

@dataclass
class User:
    name: str = tagged(default="", json="name,omitempty")
    age: int = tagged(default=0, json="age,omitempty")

to_map(User("John"), "json", True, False)   # {'name': 'John'}
to_map(User("John"), "json", False, False)  # {'name': 'John', 'age': 0}
tags(User("John"))                          # ['age', 'name']
values(User("John"))                        # [0, 'John']
```
"""

from __future__ import annotations

from .constants import DEFAULT_TAG_KEY, OMIT_EMPTY
from .emptiness import is_empty
from .errors import (
    MalformedFieldError,
    MapperConfigError,
    ProjectionFault,
    SkipField,
    TagmapError,
)
from .fields import FieldDescriptor, describe, embedded, is_record, tagged
from .projection import project_values, resize, sorted_keys, tags, values
from .resolver import is_exported, parse_annotation, resolve_key
from .walker import to_map

__all__ = [
    "DEFAULT_TAG_KEY",
    "OMIT_EMPTY",
    "is_empty",
    "TagmapError",
    "SkipField",
    "ProjectionFault",
    "MalformedFieldError",
    "MapperConfigError",
    "FieldDescriptor",
    "describe",
    "embedded",
    "is_record",
    "tagged",
    "project_values",
    "resize",
    "sorted_keys",
    "tags",
    "values",
    "is_exported",
    "parse_annotation",
    "resolve_key",
    "to_map",
]
