"""Operation-specific Rich renderers for ServiceResult.

Renderers are picked by the shape of ``result.data``: country lists become
tables, a single country becomes a key/value panel, currency stats become a
table. Everything else falls through to a generic key/value listing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table

from countryws.domain.country import Country, CurrencyStats
from countryws.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from countryws.services.result import ServiceResult


def render_result(result: ServiceResult) -> str:
    console = create_console()
    if not result.ok:
        _render_error(result, console)
    else:
        data = result.data
        if isinstance(data.get("items"), list):
            _render_country_table(data["items"], console)
        elif isinstance(data.get("currencies"), dict):
            _render_currency_table(data["currencies"], console)
        elif "country" in data:
            _render_country(result.op, data["country"], console)
        else:
            _render_generic(result.op, data, console)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output: one country name per line, or ``OK: op``."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(country.name for country in items)
    country = result.data.get("country")
    if isinstance(country, Country):
        return country.name
    return f"OK: {result.op}"


def _render_error(result: ServiceResult, console: Console) -> None:
    if result.error is None:
        console.print(f"[cws.error]ERROR:[/] {result.op}")
        return
    console.print(
        f"[cws.error]ERROR:[/] [cws.op]{result.op}[/] — {result.error.message}"
        f" [cws.key]({result.error.code})[/]"
    )


def _render_country_table(items: list[Country], console: Console) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", justify="right")
    table.add_column("Name", style="cws.name")
    table.add_column("Population", justify="right", style="cws.number")
    table.add_column("Capital")
    table.add_column("Currency")
    for country in items:
        table.add_row(
            str(country.id or ""),
            country.name,
            f"{country.population:,}",
            country.capital,
            country.currency,
        )
    console.print(table)
    console.print(f"[cws.key]{len(items)} countries[/]")


def _render_currency_table(currencies: dict[str, CurrencyStats], console: Console) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Currency")
    table.add_column("Countries", justify="right")
    table.add_column("Total population", justify="right", style="cws.number")
    for code, stats in currencies.items():
        table.add_row(code, str(stats.count), f"{stats.total_population:,}")
    console.print(table)


def _render_country(op: str, country: Country | None, console: Console) -> None:
    if country is None:
        console.print(f"[cws.ok]OK:[/] [cws.op]{op}[/] — no match")
        return
    console.print(f"[cws.ok]OK:[/] [cws.op]{op}[/]")
    for key, value in country.model_dump().items():
        console.print(f"  [cws.key]{key}:[/] {value}")


def _render_generic(op: str, data: dict[str, Any], console: Console) -> None:
    console.print(f"[cws.ok]OK:[/] [cws.op]{op}[/]")
    for key, value in data.items():
        console.print(f"  [cws.key]{key}:[/] {value}")
