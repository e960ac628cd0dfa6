"""
tagmap — metadata-driven conversion between records and ``dict[str, Any]`` mappings.

## Responsibilities
- Convert dataclass and pydantic records into mappings keyed by field tags
  (e.g. ``json="name,omitempty"``), with omit-empty and flattening policies.
- Enumerate a record's tag vocabulary and extract its values in tag order.
- Project mappings into caller-ordered rows and Polars frames for tabular output.

## Public API
- Mapper, configure, with_tag_key, with_omit_empty, with_flatten, prepare_to_map.
- to_map, tags, values — one-shot free functions.
- sorted_keys, project_values — projection primitives.
- tagged, embedded — dataclass field helpers carrying tag metadata.
- to_frame, rows — tabular output (polars).

## Import DAG discipline
- tagmap.core depends only on stdlib and pydantic.
- tagmap.mapper depends on tagmap.core; tagmap.tabular adds polars.

## Examples
```python
from dataclasses import dataclass
from tagmap import configure, embedded, tagged, with_omit_empty

@dataclass
class Person:
    name: str = tagged(default="", json="name,omitempty")
    age: int = tagged(default=0, json="age,omitempty")

@dataclass
class Employee:
    person: Person = embedded(default_factory=Person)
    position: str = tagged(default="", json="position,omitempty")

configure(with_omit_empty()).to_map(Employee(Person("Bob", 30), "Manager"))
# {'name': 'Bob', 'age': 30, 'position': 'Manager'}
```
"""

from __future__ import annotations

import logging

from .core import (
    FieldDescriptor,
    MalformedFieldError,
    MapperConfigError,
    ProjectionFault,
    TagmapError,
    embedded,
    is_empty,
    project_values,
    sorted_keys,
    tagged,
)
from .mapper import (
    Mapper,
    configure,
    prepare_to_map,
    tags,
    to_map,
    values,
    with_flatten,
    with_omit_empty,
    with_tag_key,
)
from .tabular import rows, to_frame

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Mapper",
    "configure",
    "with_tag_key",
    "with_omit_empty",
    "with_flatten",
    "prepare_to_map",
    "to_map",
    "tags",
    "values",
    "sorted_keys",
    "project_values",
    "is_empty",
    "tagged",
    "embedded",
    "FieldDescriptor",
    "TagmapError",
    "ProjectionFault",
    "MalformedFieldError",
    "MapperConfigError",
    "rows",
    "to_frame",
]
