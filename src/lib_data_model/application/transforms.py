"""Stateless data-shape helpers used around the tree builder and merge protocol.

Purpose
-------
Small pure transforms callers apply before or after the core operations:
isolating cached data, pulling columns out of row sets, flattening object
graphs into plain mappings, checking key presence, and normalising text.
None of them touches the inputs.

Contents
    - ``deep_copy``: isolated copy of nested containers and objects.
    - ``select_column`` / ``select_nested_column``: column projection.
    - ``to_mapping``: object graph → plain ``dict`` with key renames.
    - ``pluck``: one attribute from every object of a collection.
    - ``has_all_keys``: required-key presence check.
    - ``normalize_encoding``: make every leaf string valid text.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from typing import Any

_SCALARS = (str, bytes, bytearray, int, float, complex, bool, type(None))


def deep_copy(value: Any) -> Any:
    """Return a copy of *value* whose mutation never affects the original.

    Mappings become ``dict``; lists, tuples and sets keep their type; other
    objects go through :func:`copy.deepcopy`.

    Examples
    --------
    >>> original = {"flags": ["a"], "nested": {"n": 1}}
    >>> clone = deep_copy(original)
    >>> clone["flags"].append("b"); clone["nested"]["n"] = 2
    >>> original
    {'flags': ['a'], 'nested': {'n': 1}}
    """

    if isinstance(value, Mapping):
        return {key: deep_copy(item) for key, item in value.items()}
    if isinstance(value, list):
        return [deep_copy(item) for item in value]
    if isinstance(value, (set, frozenset, tuple)):
        return type(value)(deep_copy(item) for item in value)
    if isinstance(value, _SCALARS):
        return value
    return copy.deepcopy(value)


def select_column(rows: Mapping[Any, Any] | Iterable[Any], column: Any) -> Any:
    """Replace every row by its *column* value (``None`` when absent).

    Mapping inputs keep their keys; other iterables return a list.

    >>> select_column({"r1": {"id": 1}, "r2": {}}, "id")
    {'r1': 1, 'r2': None}
    >>> select_column([{"id": 1}, {"id": 2}], "id")
    [1, 2]
    """

    if isinstance(rows, Mapping):
        return {key: _cell(row, column) for key, row in rows.items()}
    return [_cell(row, column) for row in rows]


def select_nested_column(tree: Mapping[Any, Any], column: Any, *, include_objects: bool = False) -> Any:
    """Walk *tree* and keep only the values stored under *column*.

    A node holding *column* collapses to that value when it is a scalar (or an
    object and *include_objects* is set). Other mapping and list children are
    walked recursively; unrelated scalars are dropped.

    >>> select_nested_column({"a": {"b": {"_value": 2}}, "x": 3}, "_value")
    {'a': {'b': 2}}
    >>> select_nested_column({"a": {"_value": 1, "b": {"_value": 2}}}, "_value")
    {'a': 1}
    >>> select_nested_column({"rows": [{"id": 1}, {"id": 2}, "junk"]}, "id")
    {'rows': [1, 2]}
    """

    selected: Any = {}
    for key, value in tree.items():
        if key == column and _selectable(value, include_objects):
            selected = value
        elif key != column and _walkable(value):
            if not isinstance(selected, dict):
                continue
            selected[key] = _select_child(value, column, include_objects)
    return selected


def _select_child(value: Any, column: Any, include_objects: bool) -> Any:
    if isinstance(value, Mapping):
        return select_nested_column(value, column, include_objects=include_objects)
    return [_select_child(item, column, include_objects) for item in value if _walkable(item)]


def _walkable(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def to_mapping(value: Any, key_renames: Mapping[str, str] | None = None) -> Any:
    """Convert an object graph into plain ``dict`` / ``list`` values.

    Objects contribute their instance attributes. Every literal substring in
    *key_renames* is replaced in every key encountered, at any depth.

    >>> class Point:
    ...     def __init__(self):
    ...         self._x = 1
    ...         self.tags = [{"k_v": "v"}]
    >>> to_mapping(Point(), {"_": ""})
    {'x': 1, 'tags': [{'kv': 'v'}]}
    """

    renames = dict(key_renames or {})
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, Mapping):
        items: Iterable[tuple[Any, Any]] = value.items()
    elif isinstance(value, (list, tuple, set, frozenset)):
        return [to_mapping(item, renames) for item in value]
    elif hasattr(value, "__dict__"):
        items = vars(value).items()
    else:
        return value
    return {_rename(key, renames): to_mapping(item, renames) for key, item in items}


def pluck(objects: Mapping[Any, Any] | Iterable[Any], attribute: str) -> Any:
    """Return *attribute* of every object, keeping mapping keys.

    >>> class Row:
    ...     def __init__(self, name):
    ...         self.name = name
    >>> pluck([Row("a"), Row("b")], "name")
    ['a', 'b']
    """

    if isinstance(objects, Mapping):
        return {key: getattr(item, attribute) for key, item in objects.items()}
    return [getattr(item, attribute) for item in objects]


def has_all_keys(mapping: Mapping[Any, Any], required: Iterable[Any]) -> bool:
    """Return ``True`` when every *required* key is present in *mapping*.

    >>> has_all_keys({"a": None, "b": 2}, {"a", "b"}), has_all_keys({"a": 1}, ["a", "c"])
    (True, False)
    """

    return all(key in mapping for key in required)


def normalize_encoding(mapping: Mapping[Any, Any], encoding: str = "utf-8") -> dict[Any, Any]:
    """Return a copy of *mapping* whose leaf strings are valid *encoding* text.

    Nested mappings, lists and tuples are walked. ``bytes`` leaves are
    decoded, lone surrogates in ``str`` leaves are replaced; non-text leaves
    are kept as they are.

    >>> normalize_encoding({"a": b"caf\\xc3\\xa9", "b": {"c": "ok"}, "n": 1})
    {'a': 'café', 'b': {'c': 'ok'}, 'n': 1}
    >>> normalize_encoding({"names": [b"caf\\xc3\\xa9", ("x",)]})
    {'names': ['café', ('x',)]}
    """

    return {key: _normalize(value, encoding) for key, value in mapping.items()}


def _normalize(value: Any, encoding: str) -> Any:
    if isinstance(value, Mapping):
        return normalize_encoding(value, encoding)
    if isinstance(value, list):
        return [_normalize(item, encoding) for item in value]
    if isinstance(value, tuple):
        return tuple(_normalize(item, encoding) for item in value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode(encoding, errors="replace")
    if isinstance(value, str):
        return value.encode(encoding, errors="replace").decode(encoding)
    return value


def _cell(row: Any, column: Any) -> Any:
    if isinstance(row, Mapping):
        return row.get(column)
    return None


def _selectable(value: Any, include_objects: bool) -> bool:
    if isinstance(value, _SCALARS):
        return True
    return include_objects and not isinstance(value, (Mapping, list, tuple, set, frozenset))


def _rename(key: Any, renames: Mapping[str, str]) -> Any:
    if not isinstance(key, str):
        return key
    for search, replacement in renames.items():
        key = key.replace(search, replacement)
    return key
