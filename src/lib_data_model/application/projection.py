"""Entity projection.

Purpose
-------
Turn a live entity (fields behind ``get_<field>`` readers) into plain data: a
``dict`` keyed by field name, with nested entities projected recursively.

Contents
    - ``project``: public entry point.
    - ``discover_accessors``: declared fields that have a matching accessor.
"""

from __future__ import annotations

from typing import Any, Callable

from ..domain.accessors import RESERVED_FIELDS, AccessorKind, READER_PREFIX, accessor_name, declared_fields
from .ports import Projectable


def discover_accessors(entity: object, kind: AccessorKind = READER_PREFIX) -> dict[str, Callable[..., Any]]:
    """Return ``{field: bound accessor}`` for declared fields exposing a *kind* accessor.

    Fields without a matching callable accessor are not part of the entity
    contract and are left out, as are the reserved names ``data`` and
    ``unique_identifier`` whose readers are protocol methods.

    Examples
    --------
    >>> class Person:
    ...     def __init__(self):
    ...         self._name = "a"
    ...         self._cache = {}
    ...     def get_name(self):
    ...         return self._name
    >>> list(discover_accessors(Person()))
    ['name']
    """

    found: dict[str, Callable[..., Any]] = {}
    for field in declared_fields(entity):
        if field in RESERVED_FIELDS:
            continue
        accessor = getattr(entity, accessor_name(kind, field), None)
        if callable(accessor):
            found[field] = accessor
    return found


def project(entity: object, include_nulls: bool = True) -> dict[str, Any]:
    """Return the projection of *entity*'s current state.

    What
    ----
    Invokes every discovered reader in declaration order. Projectable results
    are projected recursively with the same *include_nulls* flag; ``None`` is
    kept only when *include_nulls* is true; everything else (scalars,
    sequences, mappings, other objects) is included as returned. Reader
    exceptions propagate.

    Examples
    --------
    >>> class Person:
    ...     def __init__(self):
    ...         self._name = "a"
    ...         self._age = None
    ...     def get_name(self):
    ...         return self._name
    ...     def get_age(self):
    ...         return self._age
    >>> project(Person(), include_nulls=False)
    {'name': 'a'}
    >>> project(Person())
    {'name': 'a', 'age': None}
    """

    result: dict[str, Any] = {}
    for field, reader in discover_accessors(entity).items():
        value = reader()
        if value is None:
            if include_nulls:
                result[field] = None
            continue
        if isinstance(value, Projectable):
            result[field] = value.get_data(include_nulls)
        else:
            result[field] = value
    return result
