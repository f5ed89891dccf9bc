"""Composition root for ``lib_data_model``.

Purpose
-------
Wire the flat-table adapters (environment, dotenv, structured files) to the
tree builder and the distinct merge, emitting structured observability
signals. Library callers that already hold their data in memory use the
application functions directly; this module serves file- and
environment-backed flows and the CLI.

Contents
--------
* :class:`SourceLoadError` – adapter failure wrapped in the domain taxonomy.
* :func:`load_table` – read a flat table from a ``.env`` or structured file.
* :func:`tree_from_file` / :func:`tree_from_env` – flat source → tree.
* :func:`merge_files` – distinct merge of two structured documents.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from .adapters.dotenv.default import DefaultDotEnvLoader
from .adapters.env.default import DefaultEnvLoader
from .adapters.file_loaders.structured import loader_for
from .application.merge import merge_distinct
from .application.tree import build_tree
from .domain.errors import DataModelError, InvalidFormat, NotFound
from .domain.tree import FlatTable, Tree, TreeOptions
from .observability import bind_trace_id, log_debug, log_info, make_event

ENV_SEPARATOR = "__"
"""Default separator for environment variable paths (``APP__DB__HOST``)."""


class SourceLoadError(DataModelError):
    """Raised when a flat-table or document source cannot be materialised.

    Wraps :class:`InvalidFormat` or :class:`NotFound` with the offending path so
    callers can catch a single exception family.
    """


def load_table(path: str | Path) -> Mapping[str, object]:
    """Return the mapping stored in *path*.

    ``.env`` files (``.env``, ``*.env``) go through the dotenv adapter; ``.json``,
    ``.toml``, ``.yaml`` and ``.yml`` through the structured loaders.

    Raises
    ------
    SourceLoadError
        Unknown suffix, missing file, or unparsable content.
    """

    source = str(path)
    loader = DefaultDotEnvLoader() if _is_dotenv(source) else loader_for(source)
    if loader is None:
        raise SourceLoadError(f"Unsupported data file type: {source}")
    try:
        return loader.load(source)
    except (InvalidFormat, NotFound) as exc:
        log_debug("source_error", **make_event("load", source, {"error": str(exc)}))
        raise SourceLoadError(f"Failed to load {source}: {exc}") from exc


def tree_from_file(path: str | Path, options: TreeOptions | None = None) -> Tree:
    """Build a tree from the flat table stored in *path*.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> env_file = Path(tmp.name) / 'app.env'
    >>> _ = env_file.write_text('cfg.db.host=localhost', encoding='utf-8')
    >>> tree_from_file(env_file, TreeOptions(prefix='cfg'))
    {'db': {'host': {'_value': 'localhost'}}}
    >>> tmp.cleanup()
    """

    options = options or TreeOptions()
    bind_trace_id(None)
    table = load_table(path)
    return _build(table, options, str(path))


def tree_from_env(
    prefix: str,
    options: TreeOptions | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Tree:
    """Build a tree from the environment variables starting with *prefix*.

    Examples
    --------
    >>> env = {'DEMO__DB__HOST': 'localhost', 'OTHER': '1'}
    >>> tree_from_env('DEMO', environ=env)
    {'DB': {'HOST': {'_value': 'localhost'}}}
    """

    if options is None:
        options = TreeOptions(separator=ENV_SEPARATOR, prefix=prefix)
    elif options.prefix is None:
        options = TreeOptions(separator=options.separator, prefix=prefix, leaf_key=options.leaf_key)
    bind_trace_id(None)
    table = DefaultEnvLoader(environ=environ).load(prefix)
    return _build(table, options, prefix)


def merge_files(base: str | Path, overlay: str | Path) -> dict[str, object]:
    """Distinct-merge the document at *overlay* over the document at *base*."""

    bind_trace_id(None)
    merged = merge_distinct(load_table(base), load_table(overlay))
    log_info("documents_merged", **make_event("merge", str(overlay), {"base": str(base), "keys": len(merged)}))
    return merged


def _build(table: FlatTable, options: TreeOptions, source: str) -> Tree:
    tree = build_tree(table, options.separator, options.prefix, leaf_key=options.leaf_key)
    log_info("tree_loaded", **make_event("tree", source, {"keys": len(table)}))
    return tree


def _is_dotenv(source: str) -> bool:
    path = Path(source)
    return path.name == ".env" or path.suffix.lower() == ".env"


__all__ = [
    "ENV_SEPARATOR",
    "SourceLoadError",
    "load_table",
    "tree_from_env",
    "tree_from_file",
    "merge_files",
]
