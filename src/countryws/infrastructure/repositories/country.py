"""SQLite-backed country repository (SQLAlchemy Core)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from countryws.domain.country import MAX_POPULATION, Country, CurrencyStats, normalize_key
from countryws.domain.errors import ConflictError, NotFoundError
from countryws.infrastructure.database.schema import countries

logger = logging.getLogger(__name__)

_COLUMNS = (
    countries.c.id,
    countries.c.name,
    countries.c.population,
    countries.c.capital,
    countries.c.currency,
)


def row_to_country(row: Mapping[str, Any]) -> Country:
    """Map a ``countries`` row to the domain record."""
    return Country(
        id=int(row["id"]),
        name=str(row["name"]),
        population=int(row["population"]),
        capital=str(row["capital"]),
        currency=str(row["currency"]),
    )


def country_to_row(country: Country) -> dict[str, Any]:
    """Map the domain record to ``countries`` column values (without ``id``)."""
    return {
        "name": country.name,
        "name_key": country.name_key,
        "population": country.population,
        "capital": country.capital,
        "capital_key": country.capital_key,
        "currency": country.currency,
    }


class SqlCountryRepository:
    """Encapsulates SQL for country reads and single-row writes."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def close(self) -> None:
        self._engine.dispose()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def find_by_name(self, name: str) -> Country:
        stmt = select(*_COLUMNS).where(countries.c.name_key == normalize_key(name))
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        if row is None:
            raise NotFoundError(f"No country named '{name}'")
        return row_to_country(row)

    def find_by_capital(self, capital: str) -> Country:
        stmt = (
            select(*_COLUMNS)
            .where(countries.c.capital_key == normalize_key(capital))
            .order_by(countries.c.id)
            .limit(1)
        )
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        if row is None:
            raise NotFoundError(f"No country with capital '{capital}'")
        return row_to_country(row)

    def find_by_id(self, country_id: int) -> Country:
        stmt = select(*_COLUMNS).where(countries.c.id == country_id)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        if row is None:
            raise NotFoundError(f"No country with id {country_id}")
        return row_to_country(row)

    def find_all(self) -> list[Country]:
        stmt = select(*_COLUMNS).order_by(countries.c.id)
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [row_to_country(row) for row in rows]

    def find_by_population_greater_than(self, threshold: int) -> list[Country]:
        # Out of INTEGER range for the driver, and no stored row can exceed it.
        if threshold >= MAX_POPULATION:
            return []
        stmt = (
            select(*_COLUMNS)
            .where(countries.c.population > threshold)
            .order_by(countries.c.population.desc(), countries.c.name)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [row_to_country(row) for row in rows]

    def aggregate_by_currency(self) -> dict[str, CurrencyStats]:
        count_col = func.count(countries.c.id).label("count")
        stmt = (
            select(
                countries.c.currency,
                count_col,
                func.sum(countries.c.population).label("total_population"),
            )
            .group_by(countries.c.currency)
            .order_by(count_col.desc(), countries.c.currency)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return {
            str(row["currency"]): CurrencyStats(
                count=int(row["count"]),
                total_population=int(row["total_population"] or 0),
            )
            for row in rows
        }

    def count(self) -> int:
        stmt = select(func.count(countries.c.id))
        with self._engine.connect() as conn:
            return int(conn.execute(stmt).scalar_one() or 0)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(self, country: Country) -> Country:
        try:
            with self._engine.begin() as conn:
                result = conn.execute(insert(countries).values(**country_to_row(country)))
                new_id = result.inserted_primary_key[0]
        except IntegrityError as exc:
            logger.debug("Insert rejected for %s", country.name, exc_info=True)
            raise ConflictError(f"Country '{country.name}' already exists") from exc
        return country.model_copy(update={"id": int(new_id)})

    def update(self, country: Country) -> Country:
        if country.id is None:
            raise NotFoundError(f"Country '{country.name}' has not been saved")
        stmt = (
            update(countries)
            .where(countries.c.id == country.id)
            .values(**country_to_row(country))
        )
        try:
            with self._engine.begin() as conn:
                result = conn.execute(stmt)
        except IntegrityError as exc:
            logger.debug("Update rejected for id %s", country.id, exc_info=True)
            raise ConflictError(f"Country '{country.name}' already exists") from exc
        if result.rowcount == 0:
            raise NotFoundError(f"No country with id {country.id}")
        return country

    def delete(self, name: str) -> bool:
        stmt = delete(countries).where(countries.c.name_key == normalize_key(name))
        with self._engine.begin() as conn:
            result = conn.execute(stmt)
        return result.rowcount > 0
