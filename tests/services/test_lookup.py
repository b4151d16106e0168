"""Tests for LookupService use cases."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from countryws.domain.country import Country
from countryws.services.lookup import LookupService
from countryws.services.ports import CountryRepository


@pytest.fixture
def strict_repo() -> MagicMock:
    """A repository mock that fails the test if validation lets a call through."""
    return MagicMock(spec=CountryRepository)


class TestFindByName:
    def test_found(self, service: LookupService) -> None:
        result = service.find_by_name("España")
        assert result.ok
        country = result.data["country"]
        assert isinstance(country, Country)
        assert (country.capital, country.currency, country.population) == (
            "Madrid",
            "EUR",
            47000000,
        )

    def test_case_insensitive(self, service: LookupService) -> None:
        for country in service.list_all().data["items"]:
            upper = service.find_by_name(country.name.upper()).data["country"]
            assert upper == country

    def test_surrounding_whitespace_ignored(self, service: LookupService) -> None:
        assert service.find_by_name("  españa  ").data["country"].name == "España"

    def test_absent_is_empty_success(self, service: LookupService) -> None:
        result = service.find_by_name("Atlantis")
        assert result.ok
        assert result.data["country"] is None
        assert result.error is None

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_is_invalid_and_skips_repository(
        self, strict_repo: MagicMock, name: str | None
    ) -> None:
        result = LookupService(strict_repo).find_by_name(name)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_ARGUMENT"
        strict_repo.find_by_name.assert_not_called()


class TestFindByCapital:
    def test_found(self, service: LookupService) -> None:
        result = service.find_by_capital("lisboa")
        assert result.ok
        assert result.data["country"].name == "Portugal"

    def test_absent(self, service: LookupService) -> None:
        result = service.find_by_capital("Poseidonis")
        assert result.ok
        assert result.data["country"] is None

    def test_blank(self, strict_repo: MagicMock) -> None:
        result = LookupService(strict_repo).find_by_capital(" ")
        assert result.error is not None
        assert result.error.code == "INVALID_ARGUMENT"
        strict_repo.find_by_capital.assert_not_called()


class TestListAndAggregate:
    def test_list_all(self, service: LookupService) -> None:
        result = service.list_all()
        assert result.ok
        assert result.data["count"] == 20
        assert len(result.data["items"]) == 20

    def test_population_above(self, service: LookupService) -> None:
        result = service.find_by_population_above(100000000)
        assert result.ok
        items = result.data["items"]
        assert [country.name for country in items[:2]] == ["India", "China"]
        assert all(country.population > 100000000 for country in items)
        assert result.data["count"] == len(items)

    def test_population_above_beyond_integer_range(self, service: LookupService) -> None:
        result = service.find_by_population_above(10**20)
        assert result.ok
        assert result.data["count"] == 0
        assert result.data["items"] == []

    def test_population_above_negative_is_invalid(self, strict_repo: MagicMock) -> None:
        result = LookupService(strict_repo).find_by_population_above(-1)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_ARGUMENT"
        assert result.error.detail == {"threshold": -1}
        strict_repo.find_by_population_greater_than.assert_not_called()

    def test_stats_by_currency(self, service: LookupService) -> None:
        result = service.stats_by_currency()
        assert result.ok
        currencies = result.data["currencies"]
        assert currencies["EUR"].count == 6
        assert result.data["total_countries"] == service.count().data["count"] == 20


class TestAddCountry:
    def test_add_then_find(self, service: LookupService) -> None:
        added = service.add_country("Noruega", 5500000, "Oslo", "NOK")
        assert added.ok
        stored = added.data["country"]
        assert stored.id is not None

        found = service.find_by_name("noruega").data["country"]
        assert found == stored
        assert found.same_fields(
            Country(name="Noruega", population=5500000, capital="Oslo", currency="NOK")
        )

    def test_duplicate_is_conflict(self, service: LookupService) -> None:
        before = service.count().data["count"]
        result = service.add_country("ESPAÑA", 1, "Toledo", "EUR")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "CONFLICT"
        assert service.count().data["count"] == before
        assert service.find_by_name("España").data["country"].capital == "Madrid"

    def test_invalid_fields(self, strict_repo: MagicMock) -> None:
        result = LookupService(strict_repo).add_country("", -3, "Oslo", "NOK")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_ARGUMENT"
        assert "name" in result.error.message
        assert "population" in result.error.message
        strict_repo.save.assert_not_called()

    def test_oversized_population_is_invalid(self, service: LookupService) -> None:
        before = service.count().data["count"]
        result = service.add_country("Gigantia", 10**20, "Mega", "GIG")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_ARGUMENT"
        assert "population" in result.error.message
        assert service.count().data["count"] == before

    def test_lower_case_currency_joins_existing_group(self, service: LookupService) -> None:
        service.add_country("Irlanda", 5100000, "Dublín", "eur")
        currencies = service.stats_by_currency().data["currencies"]
        assert "eur" not in currencies
        assert currencies["EUR"].count == 7


class TestUpdateCountry:
    def test_update_population(self, service: LookupService) -> None:
        original = service.find_by_name("España").data["country"]
        result = service.update_country("españa", population=48000000)
        assert result.ok
        updated = result.data["country"]
        assert updated.id == original.id
        assert updated.population == 48000000
        assert updated.capital == "Madrid"

    def test_rename(self, service: LookupService) -> None:
        result = service.update_country("Reino Unido", new_name="United Kingdom")
        assert result.ok
        assert service.find_by_name("Reino Unido").data["country"] is None
        assert service.find_by_name("united kingdom").data["country"].capital == "Londres"

    def test_rename_collision(self, service: LookupService) -> None:
        result = service.update_country("Chile", new_name="Perú")
        assert result.error is not None
        assert result.error.code == "CONFLICT"

    def test_missing(self, service: LookupService) -> None:
        result = service.update_country("Atlantis", population=1)
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_nothing_to_update(self, strict_repo: MagicMock) -> None:
        result = LookupService(strict_repo).update_country("Chile")
        assert result.error is not None
        assert result.error.code == "INVALID_ARGUMENT"
        strict_repo.find_by_name.assert_not_called()

    def test_invalid_change(self, strict_repo: MagicMock) -> None:
        result = LookupService(strict_repo).update_country("Chile", population=-1)
        assert result.error is not None
        assert result.error.code == "INVALID_ARGUMENT"
        strict_repo.find_by_name.assert_not_called()


class TestDeleteCountry:
    def test_end_to_end_lifecycle(self, service: LookupService) -> None:
        assert service.count().data["count"] == 20
        spain = service.find_by_name("España").data["country"]
        assert (spain.capital, spain.currency, spain.population) == ("Madrid", "EUR", 47000000)

        deleted = service.delete_country("España")
        assert deleted.ok
        assert deleted.data["deleted"] is True

        assert service.find_by_name("España").data["country"] is None
        assert service.count().data["count"] == 19

    def test_delete_absent(self, service: LookupService) -> None:
        result = service.delete_country("Atlantis")
        assert result.ok
        assert result.data["deleted"] is False

    def test_delete_blank(self, strict_repo: MagicMock) -> None:
        result = LookupService(strict_repo).delete_country("")
        assert result.error is not None
        assert result.error.code == "INVALID_ARGUMENT"
        strict_repo.delete.assert_not_called()


class TestRepositoryFailures:
    def test_unexpected_errors_propagate(self, strict_repo: MagicMock) -> None:
        strict_repo.find_all.side_effect = RuntimeError("disk on fire")
        with pytest.raises(RuntimeError, match="disk on fire"):
            LookupService(strict_repo).list_all()
