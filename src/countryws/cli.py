"""Root CLI group for countryws with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from countryws import __version__
from countryws.commands import register_commands
from countryws.commands._context import AppContext
from countryws.config.settings import CountrySettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="countryws")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, resolve_path=True, path_type=Path),
    default=None,
    help="SQLite database file, relative to the working directory (overrides [storage] path).",
)
@click.option(
    "--backend",
    type=click.Choice(["sqlite", "memory"]),
    default=None,
    help="Storage backend (overrides [storage] backend).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    db_path: Path | None,
    backend: str | None,
) -> None:
    """countryws — country lookups over a SOAP-style document exchange."""
    storage = {key: value for key, value in (("path", db_path), ("backend", backend)) if value}
    settings = CountrySettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        storage=storage or None,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
