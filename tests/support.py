"""Entity fixtures shared by the projection, merge and entity tests."""

from __future__ import annotations

from typing import Any

from lib_data_model import Entity


class Address(Entity):
    def __init__(self, city: str | None = None, zip: str | None = None) -> None:
        self._city = city
        self._zip = zip

    def get_city(self) -> str | None:
        return self._city

    def set_city(self, value: str | None) -> None:
        self._city = value

    def get_zip(self) -> str | None:
        return self._zip

    def set_zip(self, value: str | None) -> None:
        self._zip = value


class Person(Entity):
    merge_protected_fields = frozenset({"id"})

    def __init__(
        self,
        id: int | None = None,
        name: str | None = None,
        count: int | None = None,
        tags: list[str] | None = None,
        address: Any = None,
        settings: dict[str, Any] | None = None,
    ) -> None:
        self._id = id
        self._name = name
        self._count = count
        self._tags = tags
        self._address = address
        self._settings = settings
        self._cache: dict[str, Any] = {}

    def get_id(self) -> int | None:
        return self._id

    def set_id(self, value: int | None) -> None:
        self._id = value

    def get_name(self) -> str | None:
        return self._name

    def set_name(self, value: str | None) -> None:
        self._name = value

    def get_count(self) -> int | None:
        return self._count

    def set_count(self, value: int | None) -> None:
        self._count = value

    def get_tags(self) -> list[str] | None:
        return self._tags

    def set_tags(self, value: list[str] | None) -> None:
        self._tags = value

    def get_address(self) -> Any:
        return self._address

    def set_address(self, value: Any) -> None:
        self._address = value

    def get_settings(self) -> dict[str, Any] | None:
        return self._settings

    def set_settings(self, value: dict[str, Any] | None) -> None:
        self._settings = value


class ReadOnlyPerson(Entity):
    """Target exposing readers only, so every merge write is impossible."""

    def __init__(self, name: str | None = None) -> None:
        self._name = name

    def get_name(self) -> str | None:
        return self._name


class Snapshot:
    """Plain projectable source that is not an accessor-based entity."""

    def __init__(self, data: dict[str, Any]) -> None:
        self._data = data

    def get_data(self, include_nulls: bool = True) -> dict[str, Any]:
        if include_nulls:
            return dict(self._data)
        return {key: value for key, value in self._data.items() if value is not None}
