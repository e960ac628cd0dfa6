"""
Emptiness classification for field values.

Decides whether a runtime value is the "zero" value of its type. Used by the
tag resolver to honor ``omitempty`` annotations. Pure and zero-IO.

Rules:
    - None: empty (absent reference).
    - bool: empty iff False.
    - Numbers (int, float, Decimal, Fraction): empty iff equal to zero.
    - complex: empty iff both components are zero.
    - datetime/date: empty iff the zero instant (``datetime.min`` / ``date.min``).
    - Records (dataclass/pydantic instances): never empty.
    - Sized containers (str, bytes, list, tuple, dict, set, ...): empty iff ``len == 0``.
    - Anything else: not empty.

Examples:
    >>> from tagmap.core.emptiness import is_empty
    >>> is_empty(0), is_empty(0.5), is_empty(""), is_empty([1])
    (True, False, True, False)
"""

from __future__ import annotations

from collections.abc import Sized
from datetime import date, datetime
from numbers import Number
from typing import Any

from .fields import is_record

__all__ = [
    "is_empty",
    "is_zero_instant",
]


def is_zero_instant(value: date) -> bool:
    """
    Check whether a date/datetime is the unset instant.

    Notes:
        Aware datetimes compare on their wall-clock value, so
        ``datetime.min.replace(tzinfo=timezone.utc)`` counts as zero.
    """
    if isinstance(value, datetime):
        return value.replace(tzinfo=None) == datetime.min
    return value == date.min


def is_empty(value: Any) -> bool:
    """
    Return True if `value` is the empty/zero value for its type.

    Args:
        value (Any): Field value to classify. Not mutated.

    Returns:
        bool: Classification per the module rules.
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, complex):
        return value.real == 0 and value.imag == 0
    if isinstance(value, Number):
        return value == 0
    if isinstance(value, date):
        return is_zero_instant(value)
    if is_record(value):
        return False
    if isinstance(value, Sized):
        return len(value) == 0
    return False
