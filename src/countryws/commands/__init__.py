"""Subcommand modules for countryws.

register_commands() uses deferred imports to keep ``countryws --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the country group and the standalone commands."""
    from countryws.commands.country import country
    from countryws.commands.init_cmd import init_cmd
    from countryws.commands.serve import serve
    from countryws.commands.soap import soap

    cli.add_command(country)
    cli.add_command(init_cmd)
    cli.add_command(soap)
    cli.add_command(serve)
