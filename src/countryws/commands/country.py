"""Command group: country lookups and single-record edits."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from countryws.commands._base import CountryGroup

if TYPE_CHECKING:
    from countryws.commands._context import AppContext

_COUNTRY_EXAMPLES = """\
  countryws country get España
  countryws country capital madrid
  countryws country list
  countryws country above 50000000
  countryws --json country stats
  countryws country add Noruega --population 5500000 --capital Oslo --currency NOK
  countryws country update Noruega --population 5600000
  countryws country delete Noruega"""


@click.group(cls=CountryGroup, examples=_COUNTRY_EXAMPLES)
def country() -> None:
    """Look up, list, and edit countries."""


@country.command(
    examples="""\
  countryws country get España
  countryws --json country get "reino unido\""""
)
@click.argument("name")
@click.pass_obj
def get(app: AppContext, name: str) -> None:
    """Find a country by name (case-insensitive)."""
    app.emit(app.service.find_by_name(name))


@country.command(
    examples="""\
  countryws country capital Madrid"""
)
@click.argument("capital")
@click.pass_obj
def capital(app: AppContext, capital: str) -> None:
    """Find a country by its capital (case-insensitive)."""
    app.emit(app.service.find_by_capital(capital))


@country.command(
    "list",
    examples="""\
  countryws country list
  countryws -q country list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List every country."""
    app.emit(app.service.list_all())


@country.command(
    examples="""\
  countryws country above 100000000"""
)
@click.argument("threshold", type=int)
@click.pass_obj
def above(app: AppContext, threshold: int) -> None:
    """List countries with population above THRESHOLD, largest first."""
    app.emit(app.service.find_by_population_above(threshold))


@country.command(
    examples="""\
  countryws country stats"""
)
@click.pass_obj
def stats(app: AppContext) -> None:
    """Country count and total population per currency."""
    app.emit(app.service.stats_by_currency())


@country.command(
    examples="""\
  countryws country count"""
)
@click.pass_obj
def count(app: AppContext) -> None:
    """Number of stored countries."""
    app.emit(app.service.count())


@country.command(
    examples="""\
  countryws country add Noruega --population 5500000 --capital Oslo --currency NOK"""
)
@click.argument("name")
@click.option("--population", required=True, type=int, help="Population (>= 0).")
@click.option("--capital", required=True, help="Capital city.")
@click.option("--currency", required=True, help="Currency code, e.g. EUR.")
@click.pass_obj
def add(app: AppContext, name: str, population: int, capital: str, currency: str) -> None:
    """Add a new country."""
    app.emit(app.service.add_country(name, population, capital, currency))


@country.command(
    examples="""\
  countryws country update España --population 48000000
  countryws country update "Reino Unido" --name "United Kingdom\""""
)
@click.argument("name")
@click.option("--name", "new_name", default=None, help="Rename the country.")
@click.option("--population", default=None, type=int, help="New population.")
@click.option("--capital", default=None, help="New capital.")
@click.option("--currency", default=None, help="New currency code.")
@click.pass_obj
def update(
    app: AppContext,
    name: str,
    new_name: str | None,
    population: int | None,
    capital: str | None,
    currency: str | None,
) -> None:
    """Change fields of an existing country."""
    result = app.service.update_country(
        name,
        new_name=new_name,
        population=population,
        capital=capital,
        currency=currency,
    )
    app.emit(result)


@country.command(
    examples="""\
  countryws country delete Noruega"""
)
@click.argument("name")
@click.pass_obj
def delete(app: AppContext, name: str) -> None:
    """Delete a country by name."""
    app.emit(app.service.delete_country(name))
