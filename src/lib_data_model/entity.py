"""Entity base class wiring the projection and merge protocol onto plain objects.

Subclass :class:`Entity`, keep each field in an attribute (usually private)
and expose ``get_<field>`` / ``set_<field>`` methods::

    class Address(Entity):
        def __init__(self, city=None, zip=None):
            self._city = city
            self._zip = zip

        def get_city(self): return self._city
        def set_city(self, value): self._city = value
        def get_zip(self): return self._zip
        def set_zip(self, value): self._zip = value

``Address("X").merge(Address("Y", "1"))`` then updates the first address in
place.
"""

from __future__ import annotations

from typing import Any, ClassVar

from .application.entity_merge import merge_entity
from .application.ports import Projectable
from .application.projection import project
from .domain.accessors import reader_name
from .domain.errors import MissingAccessor


class Entity:
    """Mixin giving accessor-based objects ``get_data`` and ``merge``.

    Class attributes
    ----------------
    merge_protected_fields:
        Field names a merge must never overwrite (identifiers, audit fields).
    unique_identifier_field:
        Field answered by :meth:`get_unique_identifier`.
    entity_fields:
        Optional explicit field list; when unset the instance attributes are
        discovered in insertion order.
    """

    merge_protected_fields: ClassVar[frozenset[str]] = frozenset()
    unique_identifier_field: ClassVar[str] = "id"
    entity_fields: ClassVar[tuple[str, ...] | None] = None

    def get_unique_identifier(self) -> Any:
        """Return the value of the field named by ``unique_identifier_field``."""

        name = reader_name(self.unique_identifier_field)
        reader = getattr(self, name, None)
        if not callable(reader):
            raise MissingAccessor(self.unique_identifier_field, name)
        return reader()

    def get_data(self, include_nulls: bool = True) -> dict[str, Any]:
        """Return the projection of this entity's current state."""

        return project(self, include_nulls)

    def merge(self, other: Projectable) -> Entity:
        """Merge *other* into this entity in place and return ``self``."""

        return merge_entity(self, other)
