"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by the tree builder, the entity merge
protocol, the flat-table adapters, and consuming applications. The hierarchy
lives in the domain layer so outer layers may depend on it without the domain
depending on them.

Contents
--------
* :class:`DataModelError` – umbrella base class for every library failure.
* :class:`MissingAccessor` – a merged field has no reader/writer on the target.
* :class:`ShapeMismatch` – the source cannot satisfy the target field's shape.
* :class:`MalformedPath` – a tree branch requested for an empty path.
* :class:`ValidationError` – invalid options handed to the tree builder.
* :class:`InvalidFormat` – a flat-table source could not be parsed.
* :class:`NotFound` – a flat-table source does not exist.

System Role
-----------
Core operations raise :class:`MissingAccessor` and :class:`ShapeMismatch` and
let them propagate untouched. Adapters raise :class:`InvalidFormat` and
:class:`NotFound`; the composition root wraps them in
:class:`lib_data_model.core.SourceLoadError`. Callers catch
:class:`DataModelError` to handle all library failures uniformly.
"""

from __future__ import annotations


class DataModelError(Exception):
    """Base type for all exceptions emitted by ``lib_data_model``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class MissingAccessor(DataModelError, AttributeError):
    """Raised when a merged field has no matching accessor on the target.

    Why
    ----
    Merging writes through ``set_<field>``; a target lacking the writer (or the
    reader needed to inspect its current value) cannot take part in the merge.

    Attributes
    ----------
    field:
        Logical field name taken from the source projection.
    accessor:
        Method name that was expected on the target.

    Examples
    --------
    >>> error = MissingAccessor("name", "set_name")
    >>> str(error)
    "Target has no accessor 'set_name' for field 'name'"
    >>> isinstance(error, AttributeError)
    True
    """

    def __init__(self, field: str, accessor: str) -> None:
        super().__init__(f"Target has no accessor {accessor!r} for field {field!r}")
        self.field = field
        self.accessor = accessor


class ShapeMismatch(DataModelError, TypeError):
    """Raised when the source value cannot be merged into the target's shape.

    Typical Sources
    ---------------
    The target holds a nested entity but the source field does not support
    projection, or the target holds a sequence but the source value is not one.
    """

    def __init__(self, field: str, detail: str) -> None:
        super().__init__(f"Cannot merge field {field!r}: {detail}")
        self.field = field


class MalformedPath(DataModelError):
    """A tree branch requested for zero path segments.

    Keys going through the tree builder always yield at least one segment;
    ``build_branch`` raises this when called directly with an empty path.
    """


class ValidationError(DataModelError):
    """Signifies invalid tree-builder options (for example an empty separator)."""


class InvalidFormat(DataModelError):
    """Raised when a flat-table source cannot be parsed into key/value pairs."""


class NotFound(DataModelError):
    """Represents a missing flat-table source (file or optional parser)."""
