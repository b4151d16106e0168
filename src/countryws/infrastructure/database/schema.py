"""SQLAlchemy Core table definitions for the countryws database.

``name_key`` and ``capital_key`` hold ``normalize_key()`` of their source
columns. Lookups compare against them instead of ``lower()`` because
SQLite only folds ASCII characters. AUTOINCREMENT keeps ids
from being reused after deletes.
"""

from __future__ import annotations

from sqlalchemy import Column, Index, Integer, MetaData, Table, Text

metadata = MetaData()

countries = Table(
    "countries",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False, unique=True),
    Column("name_key", Text, nullable=False, unique=True),
    Column("population", Integer, nullable=False),
    Column("capital", Text, nullable=False),
    Column("capital_key", Text, nullable=False),
    Column("currency", Text, nullable=False),
    sqlite_autoincrement=True,
)

Index("ix_countries_capital_key", countries.c.capital_key)
Index("ix_countries_population", countries.c.population)
Index("ix_countries_currency", countries.c.currency)
