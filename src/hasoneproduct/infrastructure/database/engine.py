"""Database engine setup for SQLite with WAL mode.

The DB is stored at {root}/.hasoneproduct/hasoneproduct.db.  SQLAlchemy
Core (not ORM) is used because the CLI is a short-lived process.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from hasoneproduct.infrastructure.database.schema import metadata

DATA_DIRNAME = ".hasoneproduct"
DEFAULT_DB_NAME = "hasoneproduct.db"


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode and foreign keys enabled."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(root: Path, db_name: str = DEFAULT_DB_NAME) -> Engine:
    """Initialize the database at ``{root}/.hasoneproduct/{db_name}``.

    Creates the data directory and all tables.  Idempotent, so safe to
    call on an existing store.
    """
    data_dir = root / DATA_DIRNAME
    data_dir.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(data_dir / db_name)
    metadata.create_all(engine)
    return engine
