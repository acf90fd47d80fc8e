"""SQLite database engine and schema via SQLAlchemy Core."""

from hasoneproduct.infrastructure.database.engine import create_db_engine, init_database
from hasoneproduct.infrastructure.database.schema import (
    discount_requirements,
    locale_string_resources,
    metadata,
    settings,
)

__all__ = [
    "create_db_engine",
    "discount_requirements",
    "init_database",
    "locale_string_resources",
    "metadata",
    "settings",
]
