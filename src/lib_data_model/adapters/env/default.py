"""Environment variable adapter.

Purpose
-------
Expose process environment variables as a flat table for the tree builder.
Only variables starting with the requested prefix are captured; the prefix is
kept on the keys so :func:`lib_data_model.application.tree.build_tree` strips
it the same way it strips prefixes from any other flat table.

Key behaviours
--------------
* Prefix matching is case-sensitive and exact (``APP`` does not match ``app``).
* Values are passed through untouched; no type coercion happens here.
* Emits structured logging via :mod:`lib_data_model.observability`.
"""

from __future__ import annotations

import os
from typing import Mapping

from ...observability import log_debug


class DefaultEnvLoader:
    """Load environment variables that belong to one key prefix."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability.

        Parameters
        ----------
        environ:
            Mapping to read from. Defaults to :data:`os.environ`.
        """

        self._environ = environ if environ is not None else os.environ

    def load(self, source: str) -> dict[str, str]:
        """Return the flat table of variables whose name starts with *source*.

        Examples
        --------
        >>> env = {'DEMO__DB__HOST': 'localhost', 'OTHER': 'x'}
        >>> DefaultEnvLoader(environ=env).load('DEMO')
        {'DEMO__DB__HOST': 'localhost'}
        """

        table = {key: value for key, value in self._environ.items() if key.startswith(source)}
        log_debug("env_variables_loaded", operation="tree", source=source, keys=sorted(table))
        return table
