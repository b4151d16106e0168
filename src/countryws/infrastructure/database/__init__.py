"""SQLite database engine and schema via SQLAlchemy Core."""

from countryws.infrastructure.database.engine import create_db_engine, init_database
from countryws.infrastructure.database.schema import countries, metadata

__all__ = [
    "countries",
    "create_db_engine",
    "init_database",
    "metadata",
]
