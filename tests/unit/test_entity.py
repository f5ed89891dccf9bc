from __future__ import annotations

import pytest

from lib_data_model import Entity, EntityLike, MissingAccessor, Mergeable, Projectable
from lib_data_model.domain.accessors import declared_fields, field_name, reader_name, writer_name
from tests.support import Address, Person


class Keyed(Entity):
    unique_identifier_field = "key"

    def __init__(self, key: str) -> None:
        self._key = key

    def get_key(self) -> str:
        return self._key


class Anonymous(Entity):
    pass


def test_entity_satisfies_ports() -> None:
    person = Person()
    assert isinstance(person, Projectable)
    assert isinstance(person, Mergeable)
    assert isinstance(person, EntityLike)


def test_get_data_projects_state() -> None:
    assert Person(id=7, name="n").get_data(include_nulls=False) == {"id": 7, "name": "n"}


def test_merge_updates_in_place() -> None:
    target = Person(id=1, name="old", address=Address(city="X"))
    result = target.merge(Person(id=2, name="new", address=Address(city="Y", zip="1")))
    assert result is target
    assert target.get_data(include_nulls=False) == {
        "id": 1,
        "name": "new",
        "address": {"city": "Y", "zip": "1"},
    }


def test_unique_identifier_defaults_to_id() -> None:
    assert Person(id=42).get_unique_identifier() == 42


def test_unique_identifier_field_configurable() -> None:
    assert Keyed("abc").get_unique_identifier() == "abc"


def test_unique_identifier_without_reader() -> None:
    with pytest.raises(MissingAccessor):
        Anonymous().get_unique_identifier()


def test_default_protected_fields_empty() -> None:
    assert Address.merge_protected_fields == frozenset()
    assert "id" in Person.merge_protected_fields


def test_accessor_naming() -> None:
    assert field_name("__secret") == "secret"
    assert reader_name("_first_name") == "get_first_name"
    assert writer_name("first_name") == "set_first_name"


def test_declared_fields_collapse_duplicates() -> None:
    class Twice:
        def __init__(self) -> None:
            self.name = "public"
            self._name = "private"

    assert list(declared_fields(Twice())) == ["name"]


class Document(Entity):
    def __init__(self, title: str, data: bytes) -> None:
        self._title = title
        self._data = data

    def get_title(self) -> str:
        return self._title


def test_reserved_field_names_skipped_in_projection() -> None:
    assert Document("t", b"raw").get_data() == {"title": "t"}
