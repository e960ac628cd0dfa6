"""
Tag resolution: decide the output key for one field, or skip it.

Annotation grammar
------------------
An annotation is the string stored under the active tag key, split on the
first separator into at most two tokens::

    "name"                 -> ["name"]
    "name,omitempty"       -> ["name", "omitempty"]
    "name,omitempty,extra" -> ["name", "omitempty,extra"]   (not omittable)
    ",omitempty"           -> ["", "omitempty"]             (declared name)
    "-" / "-,"             -> skipped unconditionally

Precedence
----------
1) Non-exported fields (leading underscore) are skipped.
2) A ``-`` key token skips, before any omit-empty check.
3) An empty key token (or no annotation) falls back to the declared name.
4) With omit-empty enabled, the second token equal to ``omitempty`` and an
   empty value skip the field.

Examples
--------
>>> from dataclasses import dataclass
>>> from tagmap.core.fields import describe, tagged
>>> from tagmap.core.resolver import resolve_key
>>> @dataclass
... class User:
...     name: str = tagged(default="", json="name,omitempty")
>>> fld = describe(User)[0]
>>> resolve_key(fld, "Ada", "json", True)
'name'
"""

from __future__ import annotations

from typing import Any

from .constants import OMIT_EMPTY, SKIP_MARKER, TAG_SEPARATOR
from .emptiness import is_empty
from .errors import MalformedFieldError, SkipField
from .fields import FieldDescriptor

__all__ = [
    "is_exported",
    "parse_annotation",
    "resolve_key",
]


def is_exported(name: str) -> bool:
    """
    Check whether a field name is visible for mapping.

    Args:
        name (str): Declared field name.

    Returns:
        bool: False for names starting with an underscore or with a character
        that cannot start an identifier; True otherwise.

    Raises:
        MalformedFieldError: If `name` is empty, not a string, or starts with a
            lone surrogate (an undecodable character).
    """
    if not isinstance(name, str) or not name or "\ud800" <= name[0] <= "\udfff":
        raise MalformedFieldError(f"is_exported: unsupported field: {name!r}")
    first = name[0]
    return first != "_" and first.isidentifier()


def parse_annotation(raw: str) -> list[str]:
    """Split an annotation on the first separator into one or two tokens."""
    return raw.split(TAG_SEPARATOR, 1)


def resolve_key(field: FieldDescriptor, value: Any, tag_key: str, omit_empty: bool) -> str:
    """
    Resolve the output key for a field.

    Args:
        field (FieldDescriptor): Field metadata.
        value (Any): Current field value, consulted only for omit-empty.
        tag_key (str): Metadata key holding the annotation (e.g. ``"json"``).
        omit_empty (bool): Whether ``omitempty`` annotations are honored.

    Returns:
        str: The output key.

    Raises:
        SkipField: If the field must be left out of the mapping.
        MalformedFieldError: If the field name is malformed.
    """
    if not is_exported(field.name):
        raise SkipField(field.name)
    raw = field.annotation(tag_key)
    if raw is None:
        return field.name
    tokens = parse_annotation(raw)
    if tokens[0].casefold() == SKIP_MARKER:
        raise SkipField(field.name)
    key = tokens[0] or field.name
    if omit_empty and len(tokens) > 1 and tokens[1] == OMIT_EMPTY and is_empty(value):
        raise SkipField(field.name)
    return key
