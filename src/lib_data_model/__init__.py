"""Public package surface for ``lib_data_model``.

Two families of helpers live here: rebuilding nested trees from flat
key/value tables (``build_tree`` with its ``merge_distinct`` companion), and
merging partial entity representations field by field (``Entity``,
``project``, ``merge_entity``).
"""

from __future__ import annotations

from .application.entity_merge import FieldShape, merge_entity
from .application.merge import merge_distinct
from .application.ports import EntityLike, Mergeable, Projectable
from .application.projection import discover_accessors, project
from .application.transforms import (
    deep_copy,
    has_all_keys,
    normalize_encoding,
    pluck,
    select_column,
    select_nested_column,
    to_mapping,
)
from .application.tree import build_branch, build_tree, flatten_tree
from .core import SourceLoadError, load_table, merge_files, tree_from_env, tree_from_file
from .domain.errors import (
    DataModelError,
    InvalidFormat,
    MalformedPath,
    MissingAccessor,
    NotFound,
    ShapeMismatch,
    ValidationError,
)
from .domain.tree import LEAF_KEY, TreeOptions
from .entity import Entity
from .observability import bind_trace_id, get_logger

__all__ = [
    "LEAF_KEY",
    "DataModelError",
    "Entity",
    "EntityLike",
    "FieldShape",
    "InvalidFormat",
    "MalformedPath",
    "Mergeable",
    "MissingAccessor",
    "NotFound",
    "Projectable",
    "ShapeMismatch",
    "SourceLoadError",
    "TreeOptions",
    "ValidationError",
    "bind_trace_id",
    "build_branch",
    "build_tree",
    "deep_copy",
    "discover_accessors",
    "flatten_tree",
    "get_logger",
    "has_all_keys",
    "load_table",
    "merge_distinct",
    "merge_entity",
    "merge_files",
    "normalize_encoding",
    "pluck",
    "project",
    "select_column",
    "select_nested_column",
    "to_mapping",
    "tree_from_env",
    "tree_from_file",
]
