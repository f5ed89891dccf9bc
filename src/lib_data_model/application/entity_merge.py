"""Field-by-field entity merge.

Purpose
-------
Merge the projected data of a *source* entity into a live *target* entity in
place. The strategy for each field is picked from the shape of the target's
current value:

* scalar or ``None`` → overwrite with the source value;
* sequence → append the source items that are not present yet;
* mapping → :func:`~lib_data_model.application.merge.merge_distinct`;
* entity → recursive merge with the source's own sub-entity.

Known sharp edge
----------------
Falsy source values (``0``, ``""``, ``False``, empty containers) are treated as
"nothing to merge" and never override the target. A legitimate zero or empty
string on the source is therefore ignored. The behaviour is kept for
compatibility with existing callers.

Merges are field-atomic, not object-atomic: each field is validated before it
is written, but a failure on a later field leaves earlier fields merged.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence, Set
from enum import Enum
from typing import Any, TypeVar

from ..domain.accessors import reader_name, writer_name
from ..domain.errors import MissingAccessor, ShapeMismatch
from ..observability import log_debug
from .merge import merge_distinct
from .ports import Mergeable, Projectable
from .projection import project

T = TypeVar("T")

_SCALARS = (str, bytes, bytearray, int, float, complex, bool)


class FieldShape(Enum):
    """Merge strategy selected from a target field's current value."""

    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    ENTITY = "entity"
    OPAQUE = "opaque"


def classify(value: Any) -> FieldShape:
    """Return the :class:`FieldShape` of a target field's current *value*.

    >>> classify(None), classify("x"), classify([1]), classify({"a": 1})
    (<FieldShape.SCALAR: 'scalar'>, <FieldShape.SCALAR: 'scalar'>, <FieldShape.SEQUENCE: 'sequence'>, <FieldShape.MAPPING: 'mapping'>)
    """

    if value is None or isinstance(value, _SCALARS):
        return FieldShape.SCALAR
    if isinstance(value, Mergeable):
        return FieldShape.ENTITY
    if isinstance(value, Mapping):
        return FieldShape.MAPPING
    if isinstance(value, (Sequence, Set)):
        return FieldShape.SEQUENCE
    return FieldShape.OPAQUE


def merge_entity(target: T, source: Any) -> T:
    """Merge *source* into *target* in place and return *target*.

    Why
    ----
    Two partial representations of the same entity (for instance a stored
    record and an incoming update) must combine without losing populated
    values on either side.

    Parameters
    ----------
    target:
        Entity read through ``get_<field>`` and written through ``set_<field>``.
        Fields listed in its ``merge_protected_fields`` are never written.
    source:
        A plain ``{field: value}`` mapping, any value satisfying the projection
        contract (``get_data``) or, failing that, an accessor-based object
        projected with :func:`project`.

    Returns
    -------
    T
        The same *target* object.

    Raises
    ------
    MissingAccessor
        A source field has no reader or writer on the target.
    ShapeMismatch
        The source value cannot be merged into the target field's shape.
    """

    protected = frozenset(getattr(target, "merge_protected_fields", ()) or ())
    data = _projection(source)
    for field, value in data.items():
        if field in protected:
            log_debug("merge_field_skipped", field=field, reason="protected")
            continue
        if not value:
            log_debug("merge_field_skipped", field=field, reason="empty")
            continue
        _merge_field(target, source, field, value)
    log_debug("entity_merged", entity=type(target).__name__, fields=len(data))
    return target


def _projection(source: Any) -> dict[str, Any]:
    """Return *source*'s data without ``None`` values.

    A mapping is taken as an already projected key/value view.
    """

    if isinstance(source, Mapping):
        return {field: value for field, value in source.items() if value is not None}
    if isinstance(source, Projectable):
        return source.get_data(include_nulls=False)
    return project(source, include_nulls=False)


def _merge_field(target: Any, source: Any, field: str, value: Any) -> None:
    """Merge one projected *value* into *target*'s *field*."""

    reader = _accessor(target, reader_name(field), field)
    writer = _accessor(target, writer_name(field), field)
    current = reader()
    shape = classify(current)
    if shape is FieldShape.SCALAR:
        writer(value)
    elif shape is FieldShape.SEQUENCE:
        writer(_union(current, value, field))
    elif shape is FieldShape.MAPPING:
        if not isinstance(value, Mapping):
            raise ShapeMismatch(field, f"expected a mapping, got {type(value).__name__}")
        writer(merge_distinct(current, value))
    elif shape is FieldShape.ENTITY:
        source_reader = getattr(source, reader_name(field), None)
        nested = source_reader() if callable(source_reader) else value
        if not isinstance(nested, Projectable):
            raise ShapeMismatch(field, f"source value of type {type(nested).__name__} does not support projection")
        writer(current.merge(nested))
    else:
        log_debug("merge_field_skipped", field=field, reason="opaque", type=type(current).__name__)


def _accessor(target: Any, name: str, field: str) -> Any:
    accessor = getattr(target, name, None)
    if not callable(accessor):
        raise MissingAccessor(field, name)
    return accessor


def _union(current: Any, incoming: Any, field: str) -> Any:
    """Append the items of *incoming* missing from *current*, keeping *current*'s container type.

    >>> _union(["a", "b"], ["b", "c"], "tags")
    ['a', 'b', 'c']
    >>> _union(("a",), ["a", "a", "b"], "tags")
    ('a', 'b')
    """

    if isinstance(incoming, (str, bytes, bytearray, Mapping)) or not isinstance(incoming, (Sequence, Set)):
        raise ShapeMismatch(field, f"expected a sequence, got {type(incoming).__name__}")
    combined = list(current)
    for item in incoming:
        if item not in combined:
            combined.append(item)
    if isinstance(current, list):
        return combined
    return type(current)(combined)
