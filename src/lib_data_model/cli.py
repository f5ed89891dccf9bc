"""CLI adapter for ``lib_data_model`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators rebuild trees from flat tables and distinct-merge documents
without writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata.
* :func:`cli_tree` – flat table file → tree JSON.
* :func:`cli_env_tree` – environment variables → tree JSON.
* :func:`cli_merge` – distinct merge of two documents → JSON.
* :func:`main` – entry point used by ``console_scripts`` registration.

Tree options can be preset through ``LIB_DATA_MODEL_SEPARATOR``,
``LIB_DATA_MODEL_PREFIX`` and ``LIB_DATA_MODEL_LEAF_KEY``.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .core import ENV_SEPARATOR, merge_files, tree_from_env, tree_from_file
from .domain.errors import ValidationError
from .domain.tree import DEFAULT_SEPARATOR, LEAF_KEY, TreeOptions

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
DISTRIBUTION: Final[str] = "lib_data_model"
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when not installed."""

    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "0.0.0"


def _indent_option(func):
    return click.option(
        "--indent",
        type=int,
        default=None,
        help="Pretty-print JSON output with the provided indent size",
    )(func)


def _leaf_key_option(func):
    return click.option(
        "--leaf-key",
        envvar="LIB_DATA_MODEL_LEAF_KEY",
        default=LEAF_KEY,
        show_default=True,
        help="Reserved key holding leaf values",
    )(func)


@click.group(
    help="Rebuild trees from flat key/value tables and merge nested data",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name=DISTRIBUTION,
    message="lib_data_model version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command storing the traceback preference for ``lib_cli_exit_tools``."""

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        click.echo(f"{DISTRIBUTION} (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', DISTRIBUTION)}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.11')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("tree", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--source",
    "source",
    type=click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True),
    required=True,
    help="Flat table file (.env, .json, .toml, .yaml)",
)
@click.option(
    "--separator",
    envvar="LIB_DATA_MODEL_SEPARATOR",
    default=DEFAULT_SEPARATOR,
    show_default=True,
    help="Path segment separator",
)
@click.option("--prefix", envvar="LIB_DATA_MODEL_PREFIX", default=None, help="Key prefix to strip")
@_leaf_key_option
@_indent_option
def cli_tree(source: Path, separator: str, prefix: Optional[str], leaf_key: str, indent: Optional[int]) -> None:
    """Rebuild the tree encoded by the keys of *source* and print it as JSON.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> runner = CliRunner()
    >>> with runner.isolated_filesystem():
    ...     _ = Path('app.env').write_text('db.host=localhost', encoding='utf-8')
    ...     result = runner.invoke(cli, ['tree', '--source', 'app.env'])
    >>> result.output.strip()
    '{"db":{"host":{"_value":"localhost"}}}'
    """

    options = _options(separator, prefix, leaf_key)
    _echo_json(tree_from_file(source, options), indent)


@cli.command("env-tree", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("prefix")
@click.option("--separator", default=ENV_SEPARATOR, show_default=True, help="Path segment separator")
@_leaf_key_option
@_indent_option
def cli_env_tree(prefix: str, separator: str, leaf_key: str, indent: Optional[int]) -> None:
    """Rebuild the tree encoded by environment variables starting with *prefix*."""

    options = _options(separator, prefix, leaf_key)
    _echo_json(tree_from_env(prefix, options), indent)


@cli.command("merge", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("base", type=click.Path(path_type=Path, exists=True, dir_okay=False, readable=True))
@click.argument("overlay", type=click.Path(path_type=Path, exists=True, dir_okay=False, readable=True))
@_indent_option
def cli_merge(base: Path, overlay: Path, indent: Optional[int]) -> None:
    """Distinct-merge OVERLAY over BASE and print the result as JSON.

    Colliding mappings merge recursively; any other collision is won by
    OVERLAY.
    """

    _echo_json(merge_files(base, overlay), indent)


def _options(separator: str, prefix: Optional[str], leaf_key: str) -> TreeOptions:
    """Build :class:`TreeOptions`, reporting invalid values as Click parameter errors."""

    try:
        return TreeOptions(separator=separator, prefix=prefix or None, leaf_key=leaf_key)
    except ValidationError as exc:
        raise click.BadParameter(str(exc)) from exc


def _echo_json(payload: object, indent: Optional[int]) -> None:
    click.echo(json.dumps(payload, indent=indent, separators=(",", ":"), ensure_ascii=False, default=str))


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=DISTRIBUTION,
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
