"""CLI adapter for ``lib_dynamodb_config`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators check what the configuration server would serve from DynamoDB
without starting the server: resolve settings, compute lookup keys, and run
a lookup end to end.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command wiring traceback handling into ``lib_cli_exit_tools``.
* :func:`cli_info` – distribution metadata.
* :func:`cli_lookup_key` – prints the partition key for an application/profile.
* :func:`cli_settings` – prints resolved settings with the secret redacted.
* :func:`cli_find` – runs :func:`lib_dynamodb_config.core.find_environment`.
* :func:`main` – entry point used by ``console_scripts`` registration.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .core import find_environment, load_settings
from .domain.settings import RepositoryConfig
from .observability import bind_trace_id

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

_SETTINGS_OPTION = click.option(
    "--settings",
    "settings_path",
    type=click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True),
    default=None,
    help="TOML/JSON/YAML settings file (environment variables override it)",
)
_INDENT_OPTION = click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)


def _resolve_version() -> str:
    """Return the installed package version, or ``"0.0.0"`` for source checkouts."""

    try:
        return metadata.version("lib_dynamodb_config")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="DynamoDB environment repository for configuration servers",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_dynamodb_config",
    message="lib_dynamodb_config version %(version)s",
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
        meta = metadata.metadata("lib_dynamodb_config")
    except metadata.PackageNotFoundError:
        click.echo("lib_dynamodb_config (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_dynamodb_config')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("lookup-key", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("application")
@click.argument("profile")
@click.option("--delimiter", default="-", show_default=True, help="Separator between application and profile")
def cli_lookup_key(application: str, profile: str, delimiter: str) -> None:
    """Print the partition key used for APPLICATION and PROFILE.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> CliRunner().invoke(cli, ["lookup-key", "service", "test", "--delimiter", "_"]).output.strip()
    'service_test'
    """

    click.echo(RepositoryConfig(delimiter=delimiter).lookup_key(application, profile))


@cli.command("settings", context_settings=CLICK_CONTEXT_SETTINGS)
@_SETTINGS_OPTION
@_INDENT_OPTION
def cli_settings(settings_path: Optional[Path], indent: Optional[int]) -> None:
    """Print the resolved settings as JSON with the secret key redacted."""

    settings = load_settings(settings_path)
    payload = {
        "profiles": list(settings.profiles),
        "active": settings.is_active(),
        "bootstrap": settings.bootstrap,
        "dynamodb": settings.dynamodb.redacted(),
        "composite": [entry.redacted() for entry in settings.composite],
    }
    click.echo(json.dumps(payload, indent=indent, separators=(",", ":")))


@cli.command("find", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("application")
@click.argument("profile")
@click.argument("label", required=False, default=None)
@_SETTINGS_OPTION
@_INDENT_OPTION
@click.option("--trace-id", default=None, help="Correlation id attached to every log entry")
def cli_find(
    application: str,
    profile: str,
    label: Optional[str],
    settings_path: Optional[Path],
    indent: Optional[int],
    trace_id: Optional[str],
) -> None:
    """Look up APPLICATION/PROFILE and print the resulting environment as JSON."""

    bind_trace_id(trace_id)
    try:
        settings = load_settings(settings_path)
        environment = find_environment(settings, application, profile, label)
    finally:
        bind_trace_id(None)
    click.echo(environment.to_json(indent=indent))


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_dynamodb_config",
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
