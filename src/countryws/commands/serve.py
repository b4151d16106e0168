"""serve — start the MCP server (requires the countryws[mcp] extra)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from countryws.commands._base import CountryCommand

if TYPE_CHECKING:
    from countryws.commands._context import AppContext


@click.command(
    cls=CountryCommand,
    examples="""\
  # stdio transport (default)
  countryws serve

  # Streamable HTTP on a custom address
  countryws serve --transport streamable-http --host 0.0.0.0 --port 9000""",
)
@click.option(
    "--transport",
    default="stdio",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    help="MCP transport protocol.",
)
@click.option("--host", default="127.0.0.1", help="Bind address (HTTP transports only).")
@click.option("--port", default=8000, type=int, help="Listen port (HTTP transports only).")
@click.pass_obj
def serve(app: AppContext, transport: str, host: str, port: int) -> None:
    """Expose the country lookups as MCP tools."""
    from countryws.mcp.server import create_server, mcp_available

    if not mcp_available:
        click.echo("MCP not installed. Install with: pip install countryws[mcp]", err=True)
        raise SystemExit(1)

    server = create_server(app.service, host=host, port=port)
    server.run(transport=transport)
