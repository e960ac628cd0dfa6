"""
Record walker: convert a record into a ``dict[str, Any]``.

Walks declared fields in order and applies the tag resolver. Record-typed
fields are converted recursively with the same options, then either merged
into the parent (anonymous fields, or any record field when ``flatten`` is
set) or nested under their own resolved key.

Notes:
    - Merges are last-write-wins in declaration order; collisions are logged
      at DEBUG and never raised.
    - Instants (datetime/date) are atomic leaves even if a caller's subclass
      looks structured.
    - A record-typed field holding a non-record value (e.g. None) is stored raw.
    - Cyclic records are not supported.

Examples:
    >>> from dataclasses import dataclass, field
    >>> from tagmap.core.fields import tagged
    >>> from tagmap.core.walker import to_map
    >>> @dataclass
    ... class Address:
    ...     city: str = tagged(default="", json="city")
    >>> @dataclass
    ... class Person:
    ...     name: str = tagged(default="", json="name")
    ...     address: Address = tagged(default_factory=Address, json="address")
    >>> to_map(Person("Ann", Address("Oslo")), "json", False, False)
    {'name': 'Ann', 'address': {'city': 'Oslo'}}
    >>> to_map(Person("Ann", Address("Oslo")), "json", False, True)
    {'name': 'Ann', 'city': 'Oslo'}
"""

from __future__ import annotations

import logging
from typing import Any

from .errors import SkipField
from .fields import FieldDescriptor, describe, is_record, is_record_type
from .resolver import resolve_key
from .typing import FieldMap, Record

__all__ = [
    "to_map",
]

logger = logging.getLogger(__name__)


def _is_record_field(field: FieldDescriptor, value: Any) -> bool:
    if field.resolved:
        return is_record_type(field.type) and is_record(value)
    return is_record(value)


def _merge(out: FieldMap, nested: FieldMap, field: FieldDescriptor) -> None:
    for key, val in nested.items():
        if key in out:
            logger.debug("flatten: %r from field %r overwrites an earlier value", key, field.name)
        out[key] = val


def to_map(record: Record, tag_key: str, omit_empty: bool, flatten: bool) -> FieldMap:
    """
    Convert a record to a mapping of tag key -> value.

    Args:
        record (Record): Dataclass or pydantic model instance.
        tag_key (str): Metadata key holding field annotations.
        omit_empty (bool): Skip empty fields annotated with ``omitempty``.
        flatten (bool): Merge named nested records into the parent mapping.
            Anonymous (embedded) records are always merged.

    Returns:
        FieldMap: Fresh mapping; nested records appear as nested dicts unless merged.

    Raises:
        TypeError: If `record` is not a record instance.
        tagmap.core.errors.MalformedFieldError: On a malformed field name.
    """
    if isinstance(record, type):
        raise TypeError(f"expected a record instance, got class {record.__name__}")
    out: FieldMap = {}
    for field in describe(record):
        value = getattr(record, field.name)
        if _is_record_field(field, value):
            nested = to_map(value, tag_key, omit_empty, flatten)
            if field.anonymous or flatten:
                _merge(out, nested, field)
                continue
            try:
                key = resolve_key(field, value, tag_key, omit_empty)
            except SkipField:
                continue
            out[key] = nested
        else:
            try:
                key = resolve_key(field, value, tag_key, omit_empty)
            except SkipField:
                continue
            out[key] = value
    return out
