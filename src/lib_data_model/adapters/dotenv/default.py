"""`.env` adapter.

Purpose
-------
Implement the :class:`lib_data_model.application.ports.TableLoader` protocol
for `.env` files: every ``KEY=value`` line becomes one entry of a flat table
whose keys still carry their path separators.

Contents
--------
* :class:`DefaultDotEnvLoader` – reads one explicit file.
* Helper functions (`_parse_dotenv`, `_strip_quotes`) that perform parsing.

System Role
-----------
Feeds `.env` key/value pairs into the tree builder through
:func:`lib_data_model.core.tree_from_file`.
"""

from __future__ import annotations

from pathlib import Path

from ...domain.errors import InvalidFormat, NotFound
from ...observability import log_debug, log_error


class DefaultDotEnvLoader:
    """Load a dotenv file into a flat key/value table."""

    def __init__(self) -> None:
        self.last_loaded_path: str | None = None

    def load(self, source: str) -> dict[str, str]:
        """Return the flat table parsed from the `.env` file at *source*.

        Side Effects
        ------------
        Sets :attr:`last_loaded_path` and emits structured logging events.

        Examples
        --------
        >>> from tempfile import TemporaryDirectory
        >>> tmp = TemporaryDirectory()
        >>> path = Path(tmp.name) / '.env'
        >>> _ = path.write_text('SERVICE__TOKEN=secret', encoding='utf-8')
        >>> DefaultDotEnvLoader().load(str(path))
        {'SERVICE__TOKEN': 'secret'}
        >>> tmp.cleanup()
        """

        path = Path(source)
        if not path.is_file():
            raise NotFound(f"Dotenv file not found: {source}")
        data = _parse_dotenv(path)
        self.last_loaded_path = str(path)
        log_debug("dotenv_loaded", operation="tree", source=self.last_loaded_path, keys=sorted(data))
        return data


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse ``path`` into a flat dictionary, raising ``InvalidFormat`` on malformed lines.

    Blank lines, ``#`` comments and an optional ``export`` keyword are ignored.
    """

    result: dict[str, str] = {}
    with path.open("r", encoding="utf-8") as handle:
        for line_number, raw_line in enumerate(handle, start=1):
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("export "):
                line = line[len("export ") :].lstrip()
            if "=" not in line:
                log_error("dotenv_invalid_line", operation="tree", source=str(path), line=line_number)
                raise InvalidFormat(f"Malformed line {line_number} in {path}")
            key, value = line.split("=", 1)
            key = key.strip()
            if not key:
                log_error("dotenv_invalid_line", operation="tree", source=str(path), line=line_number)
                raise InvalidFormat(f"Empty key on line {line_number} in {path}")
            result[key] = _strip_quotes(value.strip())
    return result


def _strip_quotes(value: str) -> str:
    """Trim surrounding quotes and inline comments from ``value``.

    Examples
    --------
    >>> _strip_quotes('"token"')
    'token'
    >>> _strip_quotes("value # comment")
    'value'
    """

    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    if value.startswith("#"):
        return ""
    if " #" in value:
        return value.split(" #", 1)[0].strip()
    return value
