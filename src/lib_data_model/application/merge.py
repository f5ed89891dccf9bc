"""Application-layer distinct merge.

Purpose
-------
Combine two nested mappings depth-first where colliding keys either recurse
(both sides are mappings) or are replaced outright by the overlay value. Unlike
a naive recursive merge, a mapping/scalar collision is never coerced into an
indexed sequence: the overlay value simply wins.

Contents
    - ``merge_distinct``: public entry point.
    - ``_merge_value``: per-key stanza deciding between recursion and replace.

System Role
-----------
Used standalone by callers and by :func:`lib_data_model.application.tree.build_tree`
as its fold step. The entity merge protocol reuses it for mapping-valued
fields. Free of I/O and logging.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def merge_distinct(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Merge *overlay* into a copy of *base* and return the result.

    Why
    ----
    Nested data from two partial sources must combine without dropping
    branches and without changing the shape of colliding values.

    What
    ----
    Starts from a shallow copy of ``base``. For every key in ``overlay``:
    recurse when both values are mappings, otherwise store the overlay value.
    Neither input is mutated; untouched sub-mappings are shared with ``base``.

    Parameters
    ----------
    base:
        Lower-precedence mapping.
    overlay:
        Higher-precedence mapping.

    Returns
    -------
    dict[str, Any]
        Freshly allocated merged mapping.

    Examples
    --------
    >>> merge_distinct({"a": {"x": 1, "y": 2}}, {"a": {"y": 3}})
    {'a': {'x': 1, 'y': 3}}
    >>> merge_distinct({"a": {"x": 1}}, {"a": 5})
    {'a': 5}
    >>> merge_distinct({"a": 5}, {"a": {"x": 1}})
    {'a': {'x': 1}}
    """

    merged = dict(base)
    for key, value in overlay.items():
        merged[key] = _merge_value(merged.get(key), value, key in merged)
    return merged


def _merge_value(current: Any, incoming: Any, present: bool) -> Any:
    """Return the value stored for one key after merging *incoming* over *current*."""

    if present and isinstance(current, Mapping) and isinstance(incoming, Mapping):
        return merge_distinct(current, incoming)
    return incoming
