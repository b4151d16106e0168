"""soap — answer one request envelope read from a file or stdin."""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO

import click

from countryws.commands._base import CountryCommand

if TYPE_CHECKING:
    from countryws.commands._context import AppContext


@click.command(
    cls=CountryCommand,
    examples="""\
  # Envelope from a file
  countryws soap request.xml

  # Envelope from stdin, indented reply
  cat request.xml | countryws soap --pretty""",
)
@click.argument("envelope", type=click.File("rb"), default="-")
@click.option("--pretty", is_flag=True, help="Indent the reply envelope.")
@click.pass_obj
def soap(app: AppContext, envelope: BinaryIO, pretty: bool) -> None:
    """Handle a SOAP request envelope and print the reply envelope.

    Faults are ordinary replies: the exit code is 0 whenever an envelope
    was produced.
    """
    endpoint = app.endpoint(pretty=pretty or app.settings.soap.pretty)
    reply = endpoint.handle_envelope(envelope.read())
    click.echo(reply)
