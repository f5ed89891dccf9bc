"""Application-layer ports describing entity capabilities and flat-table sources.

Purpose
-------
Define the structural contracts the merge protocol and the composition root
rely on, so application code can plug in its own entities and sources without
inheriting from library classes.

Contents
--------
* :class:`Projectable` – exposes ``get_data`` (the projection contract).
* :class:`Mergeable` – exposes ``merge`` (accepts another projectable value).
* :class:`EntityLike` – both capabilities plus protected fields.
* :class:`FileLoader` – parses a structured file into a mapping.
* :class:`TableLoader` – produces a flat key/value table.

System Role
-----------
The protocols are ``runtime_checkable`` so the entity merger can decide, per
field, whether a value supports projection or merging.
"""

from __future__ import annotations

from typing import Any, ClassVar, Mapping, Protocol, runtime_checkable


@runtime_checkable
class Projectable(Protocol):
    """Value that can project its current state into plain data."""

    def get_data(self, include_nulls: bool = True) -> dict[str, Any]:
        """Return the field/value projection, omitting ``None`` unless *include_nulls*."""


@runtime_checkable
class Mergeable(Protocol):
    """Value that merges another projectable value into itself in place."""

    def merge(self, other: Projectable) -> Any:
        """Merge *other* into ``self`` and return ``self``."""


@runtime_checkable
class EntityLike(Projectable, Mergeable, Protocol):
    """Full entity contract: projection, merge, and declared protected fields."""

    merge_protected_fields: ClassVar[frozenset[str]]

    def get_unique_identifier(self) -> Any:
        """Return the value identifying this entity."""


class FileLoader(Protocol):
    """Parse a structured file into a mapping.

    Segregates parsing concerns (TOML/JSON/YAML) from orchestration logic.
    """

    def load(self, path: str) -> Mapping[str, object]:
        """Read *path* and return a mapping representation or raise ``InvalidFormat``."""


class TableLoader(Protocol):
    """Produce a flat key/value table for the tree builder."""

    def load(self, source: str) -> Mapping[str, object]:
        """Return the flat table read from *source* (a path or a key prefix)."""
