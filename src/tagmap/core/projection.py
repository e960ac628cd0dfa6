"""
Key/value projection over produced mappings.

Provides sorted key enumeration and ordered value extraction for tabular
consumers: the tag vocabulary of a record (`tags`) and its values in that
order (`values`), plus the general `project_values` primitive that writes a
mapping's values into a caller-owned buffer in any key order.

Notes:
    - `tags` and `values` always walk with omit-empty off and flattening on,
      so the vocabulary is exhaustive and stable for a record type.
    - `project_values` mutates its `out` buffer in place. Sharing one buffer
      between concurrent calls is a caller error and is not guarded.
    - Missing keys project to None, never to an error.

Examples:
    >>> from tagmap.core.projection import project_values, sorted_keys
    >>> m = {"z": 26, "a": 1, "b": 2, "c": 3}
    >>> sorted_keys(m)
    ['a', 'b', 'c', 'z']
    >>> buf = [0, 0, 0, 0]
    >>> project_values(buf, m, ["z", "b"])
    >>> buf
    [26, 2]
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableSequence, Sequence
from typing import Any

from .constants import DEFAULT_TAG_KEY
from .errors import ProjectionFault
from .typing import Record
from .walker import to_map

__all__ = [
    "sorted_keys",
    "resize",
    "project_values",
    "tags",
    "values",
]

logger = logging.getLogger(__name__)


def sorted_keys(mapping: Mapping[str, Any]) -> list[str]:
    """Return the mapping's keys in ascending codepoint order."""
    return sorted(mapping)


def resize(out: MutableSequence[Any], size: int) -> None:
    """
    Resize a sequence in place: truncate when longer, pad with None when shorter.

    Raises:
        TypeError: If `out` is None.
    """
    if out is None:
        raise TypeError("resize: nil sequence")
    if len(out) >= size:
        del out[size:]
        return
    out.extend([None] * (size - len(out)))


def project_values(
    out: MutableSequence[Any], mapping: Mapping[str, Any], order: Sequence[str]
) -> None:
    """
    Write ``mapping[order[i]]`` into ``out[i]`` after resizing `out` to ``len(order)``.

    Args:
        out (MutableSequence[Any]): Caller-owned buffer, mutated in place.
        mapping (Mapping[str, Any]): Source mapping.
        order (Sequence[str]): Key order; absent keys yield None.

    Raises:
        ProjectionFault: Wrapping any fault raised while projecting (e.g. `out`
            is None or immutable); the original exception is the ``__cause__``.
    """
    try:
        if len(out) != len(order):
            resize(out, len(order))
        for i, col in enumerate(order):
            out[i] = mapping.get(col)
    except Exception as exc:
        logger.debug("projection fault trapped: %r", exc)
        raise ProjectionFault(f"projection failed: {exc}") from exc


def tags(record: Record, tag_key: str = DEFAULT_TAG_KEY) -> list[str]:
    """
    Return the sorted tag vocabulary of a record.

    Notes:
        Empty fields are included and nested records are flattened.
    """
    return sorted_keys(to_map(record, tag_key, False, True))


def values(record: Record, tag_key: str = DEFAULT_TAG_KEY) -> list[Any]:
    """
    Return a record's values in ascending tag order.

    Notes:
        Empty fields are included and nested records are flattened.

    Raises:
        ProjectionFault: If projection fails.
    """
    mp = to_map(record, tag_key, False, True)
    out: list[Any] = []
    project_values(out, mp, sorted_keys(mp))
    return out
