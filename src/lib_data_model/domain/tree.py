"""Tree vocabulary and builder options.

Purpose
-------
Name the shapes the tree builder produces and consumes, and carry the options
(separator, prefix, leaf key) as an immutable value object so the CLI, the
composition root, and library callers agree on defaults.

Contents
--------
* :data:`LEAF_KEY` – reserved key under which a leaf holder stores its value.
* :data:`FlatTable` / :data:`Tree` – type aliases for the two data shapes.
* :class:`TreeOptions` – validated builder options.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final, Mapping, TypeAlias

from .errors import ValidationError

LEAF_KEY: Final[str] = "_value"
"""Key under which a leaf holder stores the terminal value of a path."""

DEFAULT_SEPARATOR: Final[str] = "."

FlatTable: TypeAlias = Mapping[str, Any]
Tree: TypeAlias = dict[str, Any]


@dataclass(frozen=True, slots=True)
class TreeOptions:
    """Options that control how flat keys are turned into tree paths.

    Attributes
    ----------
    separator:
        Delimiter between path segments. Must be non-empty.
    prefix:
        Optional leading substring removed from every key before splitting.
    leaf_key:
        Reserved key for leaf holders. Pick a different one when the data
        itself contains a segment named ``_value``.

    Examples
    --------
    >>> TreeOptions(separator="__", prefix="APP").separator
    '__'
    >>> TreeOptions(separator="")
    Traceback (most recent call last):
    ...
    lib_data_model.domain.errors.ValidationError: separator must not be empty
    """

    separator: str = DEFAULT_SEPARATOR
    prefix: str | None = None
    leaf_key: str = LEAF_KEY

    def __post_init__(self) -> None:
        if not self.separator:
            raise ValidationError("separator must not be empty")
        if not self.leaf_key:
            raise ValidationError("leaf_key must not be empty")
