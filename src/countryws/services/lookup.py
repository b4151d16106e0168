"""LookupService — country use cases over the repository port.

Read surfaces:
- find_by_name / find_by_capital: case-insensitive exact match
- list_all: every record
- find_by_population_above: strictly-greater filter, largest first
- stats_by_currency: count and population per currency

Write surfaces (single-row): add_country, update_country, delete_country.

Input is validated here so bad requests never reach storage. "Not found"
on the read surfaces is a successful result with ``country: None``; how
absence is shown to a client is left to each protocol adapter.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from countryws.domain.country import Country, CountryChanges
from countryws.domain.errors import (
    ConflictError,
    ErrorCode,
    NotFoundError,
    describe_validation_error,
)
from countryws.services.base import BaseService
from countryws.services.result import ServiceResult

logger = logging.getLogger(__name__)


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


class LookupService(BaseService):
    """Implements each country use case; every method returns ServiceResult."""

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def find_by_name(self, name: str | None) -> ServiceResult:
        """Find one country by name; ``data["country"]`` is None when absent."""
        op = "find_by_name"
        if _blank(name):
            return ServiceResult.failure(
                op, ErrorCode.INVALID_ARGUMENT, "Country name must not be blank"
            )
        assert name is not None
        try:
            country: Country | None = self._repo.find_by_name(name.strip())
        except NotFoundError:
            country = None
        return ServiceResult(ok=True, op=op, data={"country": country})

    def find_by_capital(self, capital: str | None) -> ServiceResult:
        """Find one country by its capital; ``data["country"]`` is None when absent."""
        op = "find_by_capital"
        if _blank(capital):
            return ServiceResult.failure(
                op, ErrorCode.INVALID_ARGUMENT, "Capital must not be blank"
            )
        assert capital is not None
        try:
            country: Country | None = self._repo.find_by_capital(capital.strip())
        except NotFoundError:
            country = None
        return ServiceResult(ok=True, op=op, data={"country": country})

    def list_all(self) -> ServiceResult:
        items = self._repo.find_all()
        return ServiceResult(ok=True, op="list_all", data={"count": len(items), "items": items})

    def find_by_population_above(self, threshold: int) -> ServiceResult:
        """Countries with population strictly above *threshold*, largest first."""
        op = "find_by_population_above"
        if threshold < 0:
            return ServiceResult.failure(
                op,
                ErrorCode.INVALID_ARGUMENT,
                f"Population threshold must be >= 0, got {threshold}",
                threshold=threshold,
            )
        items = self._repo.find_by_population_greater_than(threshold)
        return ServiceResult(
            ok=True,
            op=op,
            data={"threshold": threshold, "count": len(items), "items": items},
        )

    def stats_by_currency(self) -> ServiceResult:
        currencies = self._repo.aggregate_by_currency()
        return ServiceResult(
            ok=True,
            op="stats_by_currency",
            data={
                "total_countries": sum(stats.count for stats in currencies.values()),
                "currencies": currencies,
            },
        )

    def count(self) -> ServiceResult:
        return ServiceResult(ok=True, op="count", data={"count": self._repo.count()})

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add_country(
        self,
        name: str,
        population: int,
        capital: str,
        currency: str,
    ) -> ServiceResult:
        """Validate and store a new country.

        Fails with ``INVALID_ARGUMENT`` on bad fields and ``CONFLICT`` when
        the name (case-insensitively) is already taken.
        """
        op = "add_country"
        try:
            country = Country(
                name=name, population=population, capital=capital, currency=currency
            )
        except ValidationError as exc:
            return ServiceResult.failure(
                op, ErrorCode.INVALID_ARGUMENT, describe_validation_error(exc)
            )

        try:
            saved = self._repo.save(country)
        except ConflictError as exc:
            return ServiceResult.failure(op, exc.code, exc.message, name=country.name)

        logger.info("Added country %s (id=%s)", saved.name, saved.id)
        return ServiceResult(ok=True, op=op, data={"country": saved})

    def update_country(
        self,
        name: str | None,
        *,
        new_name: str | None = None,
        population: int | None = None,
        capital: str | None = None,
        currency: str | None = None,
    ) -> ServiceResult:
        """Change fields of the country called *name*.

        Unlike the read surfaces, a missing country is an error here
        (``NOT_FOUND``): there is nothing to return.
        """
        op = "update_country"
        if _blank(name):
            return ServiceResult.failure(
                op, ErrorCode.INVALID_ARGUMENT, "Country name must not be blank"
            )
        assert name is not None
        try:
            changes = CountryChanges(
                name=new_name, population=population, capital=capital, currency=currency
            )
        except ValidationError as exc:
            return ServiceResult.failure(
                op, ErrorCode.INVALID_ARGUMENT, describe_validation_error(exc)
            )
        if changes.empty:
            return ServiceResult.failure(op, ErrorCode.INVALID_ARGUMENT, "Nothing to update")

        try:
            current = self._repo.find_by_name(name.strip())
            updated = self._repo.update(changes.apply(current))
        except (NotFoundError, ConflictError) as exc:
            return ServiceResult.failure(op, exc.code, exc.message, name=name.strip())

        logger.info("Updated country %s (id=%s)", updated.name, updated.id)
        return ServiceResult(ok=True, op=op, data={"country": updated})

    def delete_country(self, name: str | None) -> ServiceResult:
        """Remove a country by name; ``data["deleted"]`` is False if it was absent."""
        op = "delete_country"
        if _blank(name):
            return ServiceResult.failure(
                op, ErrorCode.INVALID_ARGUMENT, "Country name must not be blank"
            )
        assert name is not None
        deleted = self._repo.delete(name.strip())
        if deleted:
            logger.info("Deleted country %s", name.strip())
        return ServiceResult(ok=True, op=op, data={"name": name.strip(), "deleted": deleted})
