"""
Lightweight typing aliases used across tagmap.

This module contains no runtime logic and is zero-IO.

Examples:
    >>> from tagmap.core.typing import FieldMap
    >>> def payload() -> FieldMap:
    ...     return {"a": 1, "b": 2}
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "Record",
    "FieldMap",
]

# Dataclass instance or pydantic model. Kept broad; both are checked at runtime.
Record = Any

# Produced mapping from tag key to raw field value (or a nested FieldMap).
FieldMap = dict[str, Any]
