"""MCP tool definitions.

Each tool has a ``*_impl`` function testable without the mcp package;
``register_tools()`` wraps them with FastMCP decorators.

Unlike the SOAP endpoint, a lookup that matches nothing is returned as
``ok: true`` with ``country: null``: MCP clients read the payload rather
than a fault channel.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from countryws.services.lookup import LookupService
    from countryws.services.result import ServiceResult


def _to_mcp_response(result: ServiceResult) -> dict[str, Any]:
    """Convert a ServiceResult to a JSON-ready dict."""
    dumped = result.model_dump(mode="json")
    response: dict[str, Any] = {
        "ok": result.ok,
        "op": result.op,
        "data": dumped["data"],
    }
    if result.warnings:
        response["warnings"] = result.warnings
    if result.error is not None:
        response["error"] = {
            "code": result.error.code,
            "message": result.error.message,
        }
    return response


def get_country_impl(service: LookupService, name: str) -> dict[str, Any]:
    return _to_mcp_response(service.find_by_name(name))


def get_country_by_capital_impl(service: LookupService, capital: str) -> dict[str, Any]:
    return _to_mcp_response(service.find_by_capital(capital))


def list_countries_impl(service: LookupService) -> dict[str, Any]:
    return _to_mcp_response(service.list_all())


def countries_above_impl(service: LookupService, threshold: int) -> dict[str, Any]:
    return _to_mcp_response(service.find_by_population_above(threshold))


def currency_stats_impl(service: LookupService) -> dict[str, Any]:
    return _to_mcp_response(service.stats_by_currency())


def register_tools(server: Any, service: LookupService) -> None:
    """Register the read-only country tools on a FastMCP server."""

    @server.tool()  # type: ignore[untyped-decorator]
    def get_country(name: str) -> dict[str, Any]:
        """Find a country by name (case-insensitive)."""
        return get_country_impl(service, name)

    @server.tool()  # type: ignore[untyped-decorator]
    def get_country_by_capital(capital: str) -> dict[str, Any]:
        """Find a country by its capital (case-insensitive)."""
        return get_country_by_capital_impl(service, capital)

    @server.tool()  # type: ignore[untyped-decorator]
    def list_countries() -> dict[str, Any]:
        """List every stored country."""
        return list_countries_impl(service)

    @server.tool()  # type: ignore[untyped-decorator]
    def countries_above(threshold: int) -> dict[str, Any]:
        """Countries with population above a threshold, largest first."""
        return countries_above_impl(service, threshold)

    @server.tool()  # type: ignore[untyped-decorator]
    def currency_stats() -> dict[str, Any]:
        """Country count and total population per currency."""
        return currency_stats_impl(service)
