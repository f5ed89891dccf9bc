"""Structured document loaders.

Purpose
-------
Read JSON, TOML and YAML documents into mappings. A document can hold either a
flat table (``{"cfg.db.host": "localhost"}``) for the tree builder or an
already nested tree for the distinct merge.

Contents
--------
* :class:`BaseFileLoader` – shared reading and mapping validation.
* :class:`TOMLFileLoader` / :class:`JSONFileLoader` / :class:`YAMLFileLoader`.
* :func:`loader_for` – pick a loader from a file suffix.

System Role
-----------
Invoked by :mod:`lib_data_model.core`; parse failures surface as
:class:`~lib_data_model.domain.errors.InvalidFormat`, missing files as
:class:`~lib_data_model.domain.errors.NotFound`.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Mapping

import yaml

from ...domain.errors import InvalidFormat, NotFound
from ...observability import log_debug, log_error


class BaseFileLoader:
    """Common utilities shared by the structured file loaders."""

    format_name = "data"

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`NotFound` when the file is missing."""

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Data file not found: {path}")
        payload = file_path.read_bytes()
        log_debug("data_file_read", operation="load", source=path, size=len(payload))
        return payload

    def _fail(self, path: str, exc: Exception) -> InvalidFormat:
        log_error("data_file_invalid", operation="load", source=path, format=self.format_name, error=str(exc))
        return InvalidFormat(f"Invalid {self.format_name.upper()} in {path}: {exc}")

    def _ensure_mapping(self, data: object, *, path: str) -> Mapping[str, object]:
        """Ensure *data* behaves like a mapping, otherwise raise ``InvalidFormat``.

        Examples
        --------
        >>> BaseFileLoader()._ensure_mapping({"key": 1}, path="demo")
        {'key': 1}
        >>> BaseFileLoader()._ensure_mapping(42, path="demo")
        Traceback (most recent call last):
        ...
        lib_data_model.domain.errors.InvalidFormat: File demo did not produce a mapping
        """

        if not isinstance(data, Mapping):
            raise InvalidFormat(f"File {path} did not produce a mapping")
        log_debug("data_file_loaded", operation="load", source=path, format=self.format_name)
        return data


class TOMLFileLoader(BaseFileLoader):
    """Load TOML documents using :mod:`tomllib`."""

    format_name = "toml"

    def load(self, path: str) -> Mapping[str, object]:
        """Return the mapping parsed from the TOML file at *path*.

        Quoted dotted keys (``"db.host" = "x"``) stay flat, which makes TOML a
        convenient carrier for flat tables.
        """

        try:
            data = tomllib.loads(self._read(path).decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise self._fail(path, exc) from exc
        return self._ensure_mapping(data, path=path)


class JSONFileLoader(BaseFileLoader):
    """Load JSON documents."""

    format_name = "json"

    def load(self, path: str) -> Mapping[str, object]:
        try:
            data = json.loads(self._read(path))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise self._fail(path, exc) from exc
        return self._ensure_mapping(data, path=path)


class YAMLFileLoader(BaseFileLoader):
    """Load YAML documents with ``yaml.safe_load``; an empty document is ``{}``."""

    format_name = "yaml"

    def load(self, path: str) -> Mapping[str, object]:
        try:
            data = yaml.safe_load(self._read(path))
        except yaml.YAMLError as exc:
            raise self._fail(path, exc) from exc
        if data is None:
            data = {}
        return self._ensure_mapping(data, path=path)


_LOADERS: dict[str, BaseFileLoader] = {
    ".toml": TOMLFileLoader(),
    ".json": JSONFileLoader(),
    ".yaml": YAMLFileLoader(),
    ".yml": YAMLFileLoader(),
}


def loader_for(path: str) -> BaseFileLoader | None:
    """Return the structured loader registered for *path*'s suffix, if any.

    >>> type(loader_for("settings.YML")).__name__
    'YAMLFileLoader'
    >>> loader_for("settings.ini") is None
    True
    """

    return _LOADERS.get(Path(path).suffix.lower())
