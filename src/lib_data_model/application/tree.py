"""Flat-table to tree reconstruction.

Purpose
-------
Rebuild nested trees from flat key/value tables whose keys encode a path with a
separator (``"cfg.db.host"`` → ``{"db": {"host": {"_value": ...}}}``). Leaf
values live under a reserved leaf key so a path can be both a branch and a
leaf without colliding with its children.

Contents
    - ``build_tree``: public entry point folding every table entry.
    - ``build_branch``: single-path tree for one entry.
    - ``split_key``: prefix/separator stripping and splitting.
    - ``flatten_tree``: inverse walk producing a flat table again.

System Role
-----------
Fed by the flat-table adapters through :mod:`lib_data_model.core`, or called
directly by applications holding form submissions or config tables.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterator

from ..domain.errors import MalformedPath
from ..domain.tree import LEAF_KEY, FlatTable, Tree, TreeOptions
from ..observability import log_debug
from .merge import merge_distinct


def build_tree(
    table: FlatTable,
    separator: str,
    prefix: str | None = None,
    *,
    leaf_key: str = LEAF_KEY,
) -> Tree:
    """Return the nested tree encoded by the keys of *table*.

    Why
    ----
    Form submissions, ``.env`` files and key/value stores hold hierarchical data
    as flat tables; callers need the hierarchy back.

    What
    ----
    For every entry, in iteration order: strip ``prefix`` and any leading
    separators, split the key, build a single branch ending in a leaf holder,
    and fold it with :func:`merge_distinct` using the new branch as *base* and
    the accumulated tree as *overlay*. Disjoint branches coexist; when two keys
    land on the same leaf the earlier entry is kept.

    Parameters
    ----------
    table:
        Flat mapping of separator-delimited keys to values.
    separator:
        Non-empty segment delimiter.
    prefix:
        Optional leading substring removed from keys that start with it.
    leaf_key:
        Reserved key under which leaf values are stored.

    Returns
    -------
    Tree
        Nested ``dict`` tree.

    Examples
    --------
    >>> build_tree({"cfg.db.host": "localhost", "cfg.cache": "redis"}, ".", "cfg")
    {'cache': {'_value': 'redis'}, 'db': {'host': {'_value': 'localhost'}}}
    >>> build_tree({"a": 1, "a.b": 2}, ".")
    {'a': {'b': {'_value': 2}, '_value': 1}}
    """

    options = TreeOptions(separator=separator, prefix=prefix, leaf_key=leaf_key)
    result: Tree = {}
    for key, value in table.items():
        branch = build_branch(split_key(key, options), value, leaf_key=options.leaf_key)
        result = merge_distinct(branch, result)
    log_debug("tree_built", keys=len(table), roots=len(result))
    return result


def split_key(key: str, options: TreeOptions) -> list[str]:
    """Strip the configured prefix and leading separators from *key*, then split it.

    A key that is empty after stripping yields a single empty segment, so the
    result always addresses a tree location.

    Examples
    --------
    >>> split_key("cfg.db.host", TreeOptions(prefix="cfg"))
    ['db', 'host']
    >>> split_key("other.db", TreeOptions(prefix="cfg"))
    ['other', 'db']
    >>> split_key("cfg", TreeOptions(prefix="cfg"))
    ['']
    """

    if options.prefix is not None and key.startswith(options.prefix):
        key = key[len(options.prefix) :]
    key = _strip_leading(key, options.separator)
    return key.split(options.separator)


def build_branch(segments: list[str], value: Any, *, leaf_key: str = LEAF_KEY) -> Tree:
    """Return a single-path tree whose last segment holds *value*.

    Raises
    ------
    MalformedPath
        When *segments* is empty.

    Examples
    --------
    >>> build_branch(["db", "host"], "localhost")
    {'db': {'host': {'_value': 'localhost'}}}
    """

    if not segments:
        raise MalformedPath("cannot build a tree branch from zero path segments")
    node: Tree = {segments[-1]: {leaf_key: value}}
    for segment in reversed(segments[:-1]):
        node = {segment: node}
    return node


def flatten_tree(
    tree: Mapping[str, Any],
    separator: str,
    prefix: str | None = None,
    *,
    leaf_key: str = LEAF_KEY,
) -> dict[str, Any]:
    """Return the flat table that :func:`build_tree` turns back into *tree*.

    Examples
    --------
    >>> flatten_tree({"db": {"host": {"_value": "localhost"}}}, ".", "cfg")
    {'cfg.db.host': 'localhost'}
    """

    options = TreeOptions(separator=separator, prefix=prefix, leaf_key=leaf_key)
    return {
        _join_path(path, options): value for path, value in _walk_leaves(tree, [], options.leaf_key)
    }


def _walk_leaves(node: Mapping[str, Any], path: list[str], leaf_key: str) -> Iterator[tuple[list[str], Any]]:
    for key, child in node.items():
        if key == leaf_key:
            yield path, child
        elif isinstance(child, Mapping):
            yield from _walk_leaves(child, [*path, key], leaf_key)


def _join_path(path: list[str], options: TreeOptions) -> str:
    joined = options.separator.join(path)
    if options.prefix is None:
        return joined
    return f"{options.prefix}{options.separator}{joined}"


def _strip_leading(key: str, separator: str) -> str:
    """Remove every leading occurrence of *separator* characters from *key*."""

    return key.lstrip(separator)
