"""
Core exception types raised by tag resolution, record walking, and projection.

Provides typed exceptions for core-domain failures:
- SkipField is an internal signal from the tag resolver to the record walker.
- ProjectionFault wraps any unexpected fault trapped while projecting values.
- MalformedFieldError flags a record type that breaks the field naming contract.
- MapperConfigError for invalid mapper settings.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - SkipField never escapes the record walker; callers never see it.
    - MalformedFieldError is deliberately not caught anywhere in tagmap.

Examples:
    Surface a projection failure as a typed error.

    >>> from tagmap.core.errors import ProjectionFault
    >>> from tagmap.core.projection import project_values
    >>> try:
    ...     project_values(None, {}, ["a"])
    ... except ProjectionFault as e:
    ...     msg = str(e)
    >>> "projection" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "TagmapError",
    "SkipField",
    "ProjectionFault",
    "MalformedFieldError",
    "MapperConfigError",
]


class TagmapError(Exception):
    """Base class for errors raised by tagmap."""


class SkipField(Exception):
    """Signal that a field must be omitted from the produced mapping."""


class ProjectionFault(TagmapError):
    """Unexpected fault trapped while projecting mapping values into a sequence."""


class MalformedFieldError(TagmapError, RuntimeError):
    """Field identifier cannot be interpreted (empty or not a string)."""


class MapperConfigError(TagmapError, ValueError):
    """Invalid mapper configuration (e.g., empty tag key)."""
