"""Accessor naming convention for entities.

An entity stores each logical field in an attribute (usually private, e.g.
``_first_name``) and exposes it through ``get_first_name`` / ``set_first_name``.
The helpers below translate between attribute names, logical field names, and
accessor method names, and list the fields an entity declares.
"""

from __future__ import annotations

from typing import Final, Iterator, Literal

READER_PREFIX: Final[str] = "get"
WRITER_PREFIX: Final[str] = "set"

AccessorKind = Literal["get", "set"]

RESERVED_FIELDS: Final[frozenset[str]] = frozenset({"data", "unique_identifier"})
"""Field names whose readers (``get_data``, ``get_unique_identifier``) belong to the entity protocol."""


def field_name(attribute: str) -> str:
    """Return the logical field name for *attribute*.

    >>> field_name("_first_name")
    'first_name'
    >>> field_name("city")
    'city'
    """

    return attribute.lstrip("_")


def accessor_name(kind: AccessorKind, field: str) -> str:
    """Return the accessor method name of *kind* for *field*.

    >>> accessor_name("set", "first_name")
    'set_first_name'
    """

    return f"{kind}_{field_name(field)}"


def reader_name(field: str) -> str:
    return accessor_name(READER_PREFIX, field)


def writer_name(field: str) -> str:
    return accessor_name(WRITER_PREFIX, field)


def declared_fields(entity: object) -> Iterator[str]:
    """Yield the logical field names declared by *entity* in declaration order.

    Classes may pin the list with an ``entity_fields`` class attribute;
    otherwise the instance attributes are used in insertion order. Duplicates
    (``name`` and ``_name``) collapse onto the first occurrence.

    Examples
    --------
    >>> class Person:
    ...     def __init__(self):
    ...         self._name = "a"
    ...         self._age = None
    >>> list(declared_fields(Person()))
    ['name', 'age']
    """

    explicit = getattr(type(entity), "entity_fields", None)
    attributes = explicit if explicit is not None else getattr(entity, "__dict__", {})
    seen: set[str] = set()
    for attribute in attributes:
        name = field_name(attribute)
        if not name or name in seen:
            continue
        seen.add(name)
        yield name
