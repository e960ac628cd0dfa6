from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from fractions import Fraction
from typing import Any

import pytest
from pydantic import BaseModel

from tagmap.core.emptiness import is_empty


@dataclass
class Point:
    x: int = 0
    y: int = 0


class Tag(BaseModel):
    label: str = ""


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, True),
        (0, True),
        (7, False),
        (-1, False),
        (0.0, True),
        (-0.5, False),
        (False, True),
        (True, False),
        (0j, True),
        (1j, False),
        (complex(2, 0), False),
        (Decimal("0"), True),
        (Decimal("0.01"), False),
        (Fraction(0, 3), True),
        ("", True),
        ("x", False),
        (b"", True),
        (b"\x00", False),
        ([], True),
        ([0], False),
        ((), True),
        ({}, True),
        ({"a": 1}, False),
        (set(), True),
        (frozenset({1}), False),
    ],
)
def test_is_empty_scalars_and_containers(value: Any, expected: bool) -> None:
    assert is_empty(value) is expected


@pytest.mark.parametrize(
    "value,expected",
    [
        (datetime.min, True),
        (datetime.min.replace(tzinfo=timezone.utc), True),
        (datetime(1970, 1, 1), False),
        (datetime(2024, 5, 1, 12, 30), False),
        (date.min, True),
        (date(2024, 5, 1), False),
    ],
)
def test_is_empty_instants_use_zero_instant_not_epoch(value: Any, expected: bool) -> None:
    assert is_empty(value) is expected


def test_records_are_never_empty() -> None:
    assert is_empty(Point()) is False
    assert is_empty(Tag()) is False


def test_unknown_objects_are_not_empty() -> None:
    assert is_empty(object()) is False


def test_is_empty_does_not_mutate_argument() -> None:
    data = [1, 2, 3]
    is_empty(data)
    assert data == [1, 2, 3]
