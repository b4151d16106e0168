"""FastMCP server setup.

Optional extra — ``mcp_available`` is False when the mcp package is missing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from countryws.services.lookup import LookupService

mcp_available = False
_FastMCP: Any = None

try:
    from mcp.server.fastmcp import FastMCP as _FastMCP  # type: ignore[no-redef,import-not-found]

    mcp_available = True
except ImportError:
    pass

__all__ = ["create_server", "mcp_available"]


def create_server(
    service: LookupService,
    *,
    host: str = "127.0.0.1",
    port: int = 8000,
) -> Any:
    """Create a FastMCP server with the country tools registered.

    Raises RuntimeError if the mcp extra is not installed.
    """
    if not mcp_available or _FastMCP is None:
        msg = "MCP extra not installed. Install with: pip install countryws[mcp]"
        raise RuntimeError(msg)

    from countryws.mcp.tools import register_tools

    server = _FastMCP("countryws", host=host, port=port)
    register_tools(server, service)
    return server
