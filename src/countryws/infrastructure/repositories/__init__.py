"""Repository backends implementing ``CountryRepository``."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from countryws.infrastructure.database.engine import init_database
from countryws.infrastructure.repositories.country import (
    SqlCountryRepository,
    country_to_row,
    row_to_country,
)
from countryws.infrastructure.repositories.memory import MemoryCountryRepository

if TYPE_CHECKING:
    from countryws.config.settings import CountrySettings

logger = logging.getLogger(__name__)

__all__ = [
    "MemoryCountryRepository",
    "SqlCountryRepository",
    "country_to_row",
    "open_repository",
    "row_to_country",
]


def open_repository(settings: CountrySettings) -> SqlCountryRepository | MemoryCountryRepository:
    """Build the repository selected by ``[storage] backend``."""
    storage = settings.storage
    if storage.backend == "memory":
        logger.debug("Using in-process country store")
        return MemoryCountryRepository()

    logger.debug("Opening SQLite country store at %s", settings.db_path)
    return SqlCountryRepository(init_database(settings.db_path))
