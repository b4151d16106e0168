"""Repository port consumed by the lookup service.

Any backend (SQLite, in-process, ...) satisfies this protocol structurally.
Absence is signalled with ``NotFoundError`` rather than an empty value so the
service can decide per use case what "not found" means; name collisions on
write raise ``ConflictError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from countryws.domain.country import Country, CurrencyStats


class CountryRepository(Protocol):
    """Record access for countries, independent of storage technology."""

    def find_by_name(self, name: str) -> Country:
        """Case-insensitive exact match on name; raises ``NotFoundError``."""
        ...

    def find_by_capital(self, capital: str) -> Country:
        """Case-insensitive exact match on capital; raises ``NotFoundError``."""
        ...

    def find_by_id(self, country_id: int) -> Country:
        """Lookup by store-assigned id; raises ``NotFoundError``."""
        ...

    def find_all(self) -> list[Country]:
        """Every record. Order is unspecified."""
        ...

    def find_by_population_greater_than(self, threshold: int) -> list[Country]:
        """Records with ``population > threshold``, largest first."""
        ...

    def aggregate_by_currency(self) -> dict[str, CurrencyStats]:
        """Per-currency count and population, most common currency first."""
        ...

    def save(self, country: Country) -> Country:
        """Insert and return the record with its new id; raises ``ConflictError``."""
        ...

    def update(self, country: Country) -> Country:
        """Overwrite the record with ``country.id``.

        Raises ``NotFoundError`` or ``ConflictError``.
        """
        ...

    def count(self) -> int:
        """Number of stored records."""
        ...

    def delete(self, name: str) -> bool:
        """Remove by name (case-insensitive); True if a record was removed."""
        ...

    def close(self) -> None:
        """Release backend resources."""
        ...
