from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import pytest
from pydantic import BaseModel, Field

from tagmap.core.constants import EMBED_KEY
from tagmap.core.fields import (
    DESCRIBE_CACHE_SIZE,
    _describe_type,
    describe,
    embedded,
    is_record,
    is_record_type,
    tagged,
)


@dataclass
class Base:
    id: int = tagged(default=0, json="id")


@dataclass
class Child(Base):
    name: str = tagged(default="", json="name,omitempty", db="name_col")
    base: Base = embedded(default_factory=Base)
    parent: Optional[Base] = None
    seen: datetime = datetime.min


class Item(BaseModel):
    sku: str = Field("", json_schema_extra={"json": "sku"})
    info: Base = Field(default_factory=Base, json_schema_extra={EMBED_KEY: True})


def test_describe_dataclass_declaration_order_includes_inherited_first() -> None:
    names = [f.name for f in describe(Child)]
    assert names == ["id", "name", "base", "parent", "seen"]
    assert [f.position for f in describe(Child)] == [0, 1, 2, 3, 4]


def test_describe_accepts_instance_or_class() -> None:
    assert describe(Child()) == describe(Child)


def test_describe_reads_tags_and_embed_flag() -> None:
    fields = {f.name: f for f in describe(Child)}
    assert fields["name"].annotation("json") == "name,omitempty"
    assert fields["name"].annotation("db") == "name_col"
    assert fields["name"].annotation("yaml") is None
    assert fields["base"].anonymous is True
    assert fields["name"].anonymous is False


def test_describe_resolves_static_types() -> None:
    fields = {f.name: f for f in describe(Child)}
    assert fields["base"].type is Base
    assert fields["seen"].type is datetime
    assert fields["parent"].resolved is True
    assert is_record_type(fields["parent"].type) is False


def test_describe_resolves_fields_around_an_unresolvable_one() -> None:
    @dataclass
    class Local:
        pass

    @dataclass
    class Holder:
        local: Local = dataclasses.field(default_factory=Local)
        base: Base = dataclasses.field(default_factory=Base)
        seen: Optional[datetime] = None

    fields = {f.name: f for f in describe(Holder)}
    assert fields["local"].resolved is False
    assert fields["base"].type is Base
    assert fields["seen"].resolved is True
    assert is_record_type(fields["seen"].type) is False


def test_describe_cache_is_bounded() -> None:
    info = _describe_type.cache_info()
    assert info.maxsize == DESCRIBE_CACHE_SIZE
    assert info.maxsize is not None


def test_describe_pydantic_model() -> None:
    fields = describe(Item)
    assert [f.name for f in fields] == ["sku", "info"]
    assert fields[0].annotation("json") == "sku"
    assert fields[1].anonymous is True
    assert fields[1].type is Base


def test_describe_tags_are_read_only() -> None:
    fld = describe(Child)[1]
    with pytest.raises(TypeError):
        fld.tags["json"] = "other"  # type: ignore[index]


def test_describe_rejects_non_records() -> None:
    with pytest.raises(TypeError, match="dataclass or pydantic"):
        describe({"a": 1})


def test_record_predicates() -> None:
    assert is_record_type(Base) and is_record_type(Item)
    assert not is_record_type(datetime)
    assert not is_record_type(dict)
    assert is_record(Base()) and is_record(Item())
    assert not is_record(Base)
    assert not is_record(None)


def test_tagged_builds_dataclass_field_metadata() -> None:
    f = tagged(default=1, json="x,omitempty")
    assert isinstance(f, dataclasses.Field)
    assert f.default == 1
    assert dict(f.metadata) == {"json": "x,omitempty"}


def test_embedded_marks_field_anonymous() -> None:
    f = embedded(default_factory=Base, json="ignored")
    assert f.metadata[EMBED_KEY] is True
    assert f.metadata["json"] == "ignored"
