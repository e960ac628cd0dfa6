from __future__ import annotations

import dataclasses
from dataclasses import dataclass

import pytest

from tagmap import (
    Mapper,
    MapperConfigError,
    configure,
    embedded,
    prepare_to_map,
    tagged,
    tags,
    to_map,
    values,
    with_flatten,
    with_omit_empty,
    with_tag_key,
)


@dataclass
class Address:
    street: str = tagged(default="", json="street,omitempty", db="street_name")
    city: str = tagged(default="", json="city,omitempty", db="city_name")


@dataclass
class Person:
    name: str = tagged(default="", json="name,omitempty", db="full_name")
    age: int = tagged(default=0, json="age,omitempty", db="years,omitempty")
    address: Address = tagged(default_factory=Address, json="address,omitempty")


@dataclass
class Badge:
    code: str = tagged(default="", json="code")


@dataclass
class Employee:
    badge: Badge = embedded(default_factory=Badge)
    person: Person = tagged(default_factory=Person, json="person")


def _person() -> Person:
    return Person(name="John", age=0, address=Address(street="1 Main St", city="Oslo"))


def test_configure_defaults() -> None:
    m = configure()
    assert m == Mapper(tag_key="json", omit_empty=False, flatten=False)


def test_configure_applies_options_in_order() -> None:
    m = configure(with_tag_key("yaml"), with_omit_empty(), with_flatten(), with_tag_key("db"))
    assert m.tag_key == "db"
    assert m.omit_empty is True
    assert m.flatten is True


def test_mapper_is_immutable() -> None:
    m = configure()
    with pytest.raises(dataclasses.FrozenInstanceError):
        m.flatten = True  # type: ignore[misc]


@pytest.mark.parametrize("bad", ["", None])
def test_mapper_rejects_empty_tag_key(bad: object) -> None:
    with pytest.raises(MapperConfigError, match="tag_key"):
        Mapper(tag_key=bad)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        configure(with_tag_key(bad))  # type: ignore[arg-type]


def test_mapper_to_map_honors_options() -> None:
    p = _person()
    assert configure().to_map(p) == {
        "name": "John",
        "age": 0,
        "address": {"street": "1 Main St", "city": "Oslo"},
    }
    assert configure(with_omit_empty(), with_flatten()).to_map(p) == {
        "name": "John",
        "street": "1 Main St",
        "city": "Oslo",
    }
    assert configure(with_tag_key("db"), with_omit_empty(), with_flatten()).to_map(p) == {
        "full_name": "John",
        "street_name": "1 Main St",
        "city_name": "Oslo",
    }


def test_mapper_tags_and_values_ignore_omit_and_flatten_settings() -> None:
    m = configure(with_omit_empty())
    p = _person()
    assert m.tags(p) == ["age", "city", "name", "street"]
    assert m.values(p) == [0, "Oslo", "John", "1 Main St"]


def test_mapper_is_reusable_across_records() -> None:
    m = configure(with_omit_empty())
    assert m.to_map(Person(name="A")) == {"name": "A", "address": {}}
    assert m.to_map(Person(age=3)) == {"age": 3, "address": {}}


def test_prepare_to_map_returns_bound_converter() -> None:
    convert = prepare_to_map(with_omit_empty(), with_flatten())
    assert convert(_person()) == {"name": "John", "street": "1 Main St", "city": "Oslo"}


def test_free_functions_match_mapper() -> None:
    p = _person()
    assert to_map(p) == Mapper().to_map(p)
    assert to_map(p, "json", True, True) == Mapper(omit_empty=True, flatten=True).to_map(p)
    assert tags(p, "db") == ["city_name", "full_name", "street_name", "years"]
    assert values(p, "db") == ["Oslo", "John", "1 Main St", 0]


def test_anonymous_and_named_nesting_together() -> None:
    e = Employee(badge=Badge(code="B7"), person=Person(name="Eve"))
    assert to_map(e) == {
        "code": "B7",
        "person": {"name": "Eve", "age": 0, "address": {"street": "", "city": ""}},
    }
    assert tags(e) == ["age", "city", "code", "name", "street"]
