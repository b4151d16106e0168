"""Database engine setup for SQLite with WAL mode.

SQLAlchemy Core (not ORM) is used: every repository call is a single
statement, so there is no benefit from session management or identity maps.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from countryws.infrastructure.database.schema import metadata


def create_db_engine(db_path: Path | None) -> Engine:
    """Create a SQLite engine with WAL mode.

    ``None`` gives a private in-memory database shared by every connection
    of the returned engine.
    """
    if db_path is None:
        engine = create_engine(
            "sqlite://",
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(f"sqlite:///{db_path}", echo=False)

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    return engine


def init_database(db_path: Path | None) -> Engine:
    """Create the ``countries`` table if needed and return the engine.

    Parent directories of *db_path* are created. Idempotent; safe to call
    on an existing database.
    """
    if db_path is not None:
        db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path)
    metadata.create_all(engine)
    return engine
