"""Shared pytest fixtures for countryws tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from countryws.config.models import DEFAULT_NAMESPACE
from countryws.infrastructure.database.engine import init_database
from countryws.infrastructure.repositories import MemoryCountryRepository, SqlCountryRepository
from countryws.services.bootstrap import seed_if_empty
from countryws.services.lookup import LookupService
from countryws.services.ports import CountryRepository
from countryws.soap.endpoint import CountryEndpoint
from countryws.soap.envelope import render_request
from countryws.soap.messages import ParsedRequest


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def sql_repository(tmp_path: Path) -> Iterator[SqlCountryRepository]:
    """SQLite-backed repository on a fresh database file."""
    repo = SqlCountryRepository(init_database(tmp_path / "countries.db"))
    try:
        yield repo
    finally:
        repo.close()


@pytest.fixture(params=["sqlite", "memory"])
def repository(request: pytest.FixtureRequest, tmp_path: Path) -> Iterator[CountryRepository]:
    """Each backend in turn; the same tests must pass against both."""
    repo: CountryRepository
    if request.param == "sqlite":
        repo = SqlCountryRepository(init_database(tmp_path / "countries.db"))
    else:
        repo = MemoryCountryRepository()
    try:
        yield repo
    finally:
        repo.close()


@pytest.fixture
def seeded_repository(repository: CountryRepository) -> CountryRepository:
    """A backend loaded with the 20 seed countries."""
    result = seed_if_empty(repository)
    assert result.ok, result.error
    return repository


@pytest.fixture
def service(seeded_repository: CountryRepository) -> LookupService:
    return LookupService(seeded_repository)


@pytest.fixture
def endpoint(service: LookupService) -> CountryEndpoint:
    return CountryEndpoint(service)


@pytest.fixture
def make_envelope() -> Callable[..., bytes]:
    """Build a request envelope: ``make_envelope("getCountryRequest", name="X")``.

    Use ``country__name="X"`` for nested ``<country><name>`` params.
    """

    def _make(operation: str, **params: str) -> bytes:
        flat = {key.replace("__", "."): value for key, value in params.items()}
        request = ParsedRequest(operation=operation, params=flat)
        return render_request(request, namespace=DEFAULT_NAMESPACE)

    return _make


@pytest.fixture
def _isolated_store(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI tests in a temp directory with no inherited configuration.

    Use via ``@pytest.mark.usefixtures("_isolated_store")``; the database
    lands at ``tmp_path / "countryws.db"``.
    """
    for var in ("COUNTRYWS_CONFIG", "COUNTRYWS_STORAGE__BACKEND", "COUNTRYWS_STORAGE__PATH"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
