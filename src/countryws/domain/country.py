"""Country record and currency aggregate.

``Country`` is the single currency of exchange between adapters: wire
payloads and storage rows are both mapped into it before crossing any
boundary.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

MAX_CURRENCY_LENGTH = 8
# Largest value a SQLite INTEGER column can hold.
MAX_POPULATION = 2**63 - 1


def _upper(value: str) -> str:
    return value.upper()


CurrencyCode = Annotated[
    str,
    Field(min_length=1, max_length=MAX_CURRENCY_LENGTH),
    AfterValidator(_upper),
]


def normalize_key(value: str) -> str:
    """Lookup key for case-insensitive equality.

    Examples:
        >>> normalize_key("  España ")
        'españa'
        >>> normalize_key("ESPAÑA") == normalize_key("españa")
        True
    """
    return value.strip().casefold()


class Country(BaseModel):
    """A country as seen by the lookup service.

    Attributes:
        id: Store-assigned identity; ``None`` until first saved.
        name: Unique display name (uniqueness is case-insensitive).
        population: Non-negative head count, at most ``MAX_POPULATION``.
        capital: Capital city name.
        currency: Short currency code, stored upper-cased (``eur`` becomes ``EUR``).
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: int | None = None
    name: str = Field(min_length=1)
    population: int = Field(ge=0, le=MAX_POPULATION)
    capital: str = Field(min_length=1)
    currency: CurrencyCode

    @property
    def name_key(self) -> str:
        return normalize_key(self.name)

    @property
    def capital_key(self) -> str:
        return normalize_key(self.capital)

    def same_fields(self, other: Country) -> bool:
        """True when every field except ``id`` matches."""
        return self.model_dump(exclude={"id"}) == other.model_dump(exclude={"id"})


class CurrencyStats(BaseModel):
    """Aggregate of all countries sharing one currency."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(ge=0)
    total_population: int = Field(ge=0)


class CountryChanges(BaseModel):
    """Partial update for an existing country; ``None`` leaves a field as is."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1)
    population: int | None = Field(default=None, ge=0, le=MAX_POPULATION)
    capital: str | None = Field(default=None, min_length=1)
    currency: CurrencyCode | None = None

    @property
    def empty(self) -> bool:
        return not self.model_dump(exclude_none=True)

    def apply(self, country: Country) -> Country:
        """Return *country* with these changes applied (``id`` preserved)."""
        return country.model_copy(update=self.model_dump(exclude_none=True))
