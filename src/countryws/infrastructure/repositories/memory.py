"""In-process country repository.

Keeps rows in the same shape as the ``countries`` table so both backends
share the storage mapping functions and the same ordering rules.
"""

from __future__ import annotations

import itertools
import threading
from collections import Counter
from typing import Any

from countryws.domain.country import Country, CurrencyStats, normalize_key
from countryws.domain.errors import ConflictError, NotFoundError
from countryws.infrastructure.repositories.country import country_to_row, row_to_country


class MemoryCountryRepository:
    """Dict-backed repository; rows keyed by id in insertion order."""

    def __init__(self) -> None:
        self._rows: dict[int, dict[str, Any]] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def close(self) -> None:
        """No resources to release."""

    def _snapshot(self) -> list[dict[str, Any]]:
        with self._lock:
            return [dict(row) for row in self._rows.values()]

    def find_by_name(self, name: str) -> Country:
        key = normalize_key(name)
        for row in self._snapshot():
            if row["name_key"] == key:
                return row_to_country(row)
        raise NotFoundError(f"No country named '{name}'")

    def find_by_capital(self, capital: str) -> Country:
        key = normalize_key(capital)
        for row in self._snapshot():
            if row["capital_key"] == key:
                return row_to_country(row)
        raise NotFoundError(f"No country with capital '{capital}'")

    def find_by_id(self, country_id: int) -> Country:
        with self._lock:
            row = self._rows.get(country_id)
        if row is None:
            raise NotFoundError(f"No country with id {country_id}")
        return row_to_country(row)

    def find_all(self) -> list[Country]:
        return [row_to_country(row) for row in self._snapshot()]

    def find_by_population_greater_than(self, threshold: int) -> list[Country]:
        rows = [row for row in self._snapshot() if row["population"] > threshold]
        rows.sort(key=lambda row: (-row["population"], row["name"]))
        return [row_to_country(row) for row in rows]

    def aggregate_by_currency(self) -> dict[str, CurrencyStats]:
        counts: Counter[str] = Counter()
        totals: Counter[str] = Counter()
        for row in self._snapshot():
            counts[row["currency"]] += 1
            totals[row["currency"]] += row["population"]
        ordered = sorted(counts, key=lambda code: (-counts[code], code))
        return {
            code: CurrencyStats(count=counts[code], total_population=totals[code])
            for code in ordered
        }

    def count(self) -> int:
        with self._lock:
            return len(self._rows)

    def save(self, country: Country) -> Country:
        row = country_to_row(country)
        with self._lock:
            if self._name_taken(row["name_key"]):
                raise ConflictError(f"Country '{country.name}' already exists")
            new_id = next(self._ids)
            self._rows[new_id] = {"id": new_id, **row}
        return country.model_copy(update={"id": new_id})

    def update(self, country: Country) -> Country:
        if country.id is None:
            raise NotFoundError(f"Country '{country.name}' has not been saved")
        row = country_to_row(country)
        with self._lock:
            if country.id not in self._rows:
                raise NotFoundError(f"No country with id {country.id}")
            if self._name_taken(row["name_key"], exclude_id=country.id):
                raise ConflictError(f"Country '{country.name}' already exists")
            self._rows[country.id] = {"id": country.id, **row}
        return country

    def delete(self, name: str) -> bool:
        key = normalize_key(name)
        with self._lock:
            for country_id, row in self._rows.items():
                if row["name_key"] == key:
                    del self._rows[country_id]
                    return True
        return False

    def _name_taken(self, name_key: str, *, exclude_id: int | None = None) -> bool:
        return any(
            row["name_key"] == name_key and country_id != exclude_id
            for country_id, row in self._rows.items()
        )
