"""Pure mappings between wire payloads and domain records."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from countryws.domain.country import Country, CurrencyStats
from countryws.domain.errors import InvalidArgumentError, MalformedRequestError

_INTEGER = re.compile(r"[+-]?[0-9]+")

# Wire order of the country element's children.
COUNTRY_FIELDS = ("name", "population", "capital", "currency")


def parse_int(raw: str, field: str) -> int:
    """Parse a decimal integer parameter.

    Raises:
        MalformedRequestError: *raw* is not a plain base-10 integer.
    """
    text = raw.strip()
    if not _INTEGER.fullmatch(text):
        raise MalformedRequestError(f"'{field}' must be an integer, got '{raw}'")
    return int(text)


def country_to_wire(country: Country) -> dict[str, Any]:
    """Domain → wire: the ``country`` element's children, in schema order."""
    wire: dict[str, Any] = {}
    if country.id is not None:
        wire["id"] = country.id
    wire.update(
        name=country.name,
        population=country.population,
        capital=country.capital,
        currency=country.currency,
    )
    return wire


def country_from_wire(fields: Mapping[str, str]) -> Country:
    """Wire → domain for a complete ``country`` element.

    Raises:
        MalformedRequestError: A field is missing or a number does not parse.
        InvalidArgumentError: The values break a ``Country`` rule.
    """
    missing = [name for name in COUNTRY_FIELDS if name not in fields]
    if missing:
        raise MalformedRequestError(f"country is missing: {', '.join(missing)}")
    raw_id = fields.get("id")
    try:
        return Country(
            id=parse_int(raw_id, "id") if raw_id else None,
            name=fields["name"],
            population=parse_int(fields["population"], "population"),
            capital=fields["capital"],
            currency=fields["currency"],
        )
    except ValidationError as exc:
        raise InvalidArgumentError.from_validation(exc) from exc


def currency_stats_to_wire(currency: str, stats: CurrencyStats) -> dict[str, Any]:
    return {
        "currency": currency,
        "count": stats.count,
        "totalPopulation": stats.total_population,
    }
