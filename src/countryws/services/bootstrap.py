"""Seed data and the idempotent bootstrap step.

The process owner calls :func:`seed_if_empty` once before serving
requests. Seeding goes through ``CountryRepository.save`` so it shares the
uniqueness rules every runtime write is held to.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from countryws.domain.country import Country
from countryws.domain.errors import ConflictError
from countryws.services.result import ServiceResult

if TYPE_CHECKING:
    from countryws.services.ports import CountryRepository

logger = logging.getLogger(__name__)

SEED_COUNTRIES: tuple[Country, ...] = (
    Country(name="España", population=47000000, capital="Madrid", currency="EUR"),
    Country(name="Francia", population=68000000, capital="París", currency="EUR"),
    Country(name="Alemania", population=84000000, capital="Berlín", currency="EUR"),
    Country(name="Italia", population=59000000, capital="Roma", currency="EUR"),
    Country(name="Portugal", population=10400000, capital="Lisboa", currency="EUR"),
    Country(name="Países Bajos", population=17800000, capital="Ámsterdam", currency="EUR"),
    Country(name="Reino Unido", population=67000000, capital="Londres", currency="GBP"),
    Country(name="Polonia", population=37700000, capital="Varsovia", currency="PLN"),
    Country(name="Estados Unidos", population=333000000, capital="Washington", currency="USD"),
    Country(name="Canadá", population=39000000, capital="Ottawa", currency="CAD"),
    Country(name="México", population=128000000, capital="Ciudad de México", currency="MXN"),
    Country(name="Argentina", population=46000000, capital="Buenos Aires", currency="ARS"),
    Country(name="Brasil", population=203000000, capital="Brasilia", currency="BRL"),
    Country(name="Chile", population=19600000, capital="Santiago", currency="CLP"),
    Country(name="Colombia", population=52000000, capital="Bogotá", currency="COP"),
    Country(name="Perú", population=34000000, capital="Lima", currency="PEN"),
    Country(name="Japón", population=125000000, capital="Tokio", currency="JPY"),
    Country(name="China", population=1410000000, capital="Pekín", currency="CNY"),
    Country(name="India", population=1420000000, capital="Nueva Delhi", currency="INR"),
    Country(name="Australia", population=26000000, capital="Canberra", currency="AUD"),
)


def seed_if_empty(
    repository: CountryRepository,
    countries: tuple[Country, ...] = SEED_COUNTRIES,
) -> ServiceResult:
    """Load *countries* when the store holds no records.

    A non-empty store is left untouched (``data["seeded"] == 0``). A name
    that is somehow already present is reported as a warning rather than
    aborting the rest of the load.
    """
    existing = repository.count()
    if existing:
        logger.debug("Store already holds %d countries; skipping seed", existing)
        return ServiceResult(ok=True, op="seed", data={"seeded": 0, "count": existing})

    warnings: list[str] = []
    seeded = 0
    for country in countries:
        try:
            repository.save(country)
        except ConflictError as exc:
            warnings.append(exc.message)
            continue
        seeded += 1

    logger.info("Seeded %d countries", seeded)
    return ServiceResult(
        ok=True,
        op="seed",
        data={"seeded": seeded, "count": repository.count()},
        warnings=warnings,
    )
