"""SQLite-backed collaborator stores.

Each store call runs in its own ``engine.begin()`` transaction.
Deletes are delete-if-present: removing a missing row is not an error.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select, update

from hasoneproduct.domain.requirements import DiscountRequirement
from hasoneproduct.infrastructure.database.schema import (
    discount_requirements,
    locale_string_resources,
    settings,
)

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class SqlSettingsStore:
    """Settings rows scoped to one store id (0 = all stores)."""

    def __init__(self, engine: Engine, *, store_id: int = 0) -> None:
        self._engine = engine
        self._store_id = store_id

    def _where(self, key: str) -> ColumnElement[bool]:
        return (settings.c.name == key.lower()) & (settings.c.store_id == self._store_id)

    def get_by_key(self, key: str) -> str | None:
        """Return the value for *key* (case-insensitive), or None."""
        with self._engine.connect() as conn:
            row = conn.execute(select(settings.c.value).where(self._where(key))).first()
        return row.value if row is not None else None

    def set_value(self, key: str, value: str) -> None:
        with self._engine.begin() as conn:
            existing = conn.execute(select(settings.c.id).where(self._where(key))).first()
            if existing is None:
                conn.execute(
                    insert(settings).values(name=key.lower(), value=value, store_id=self._store_id)
                )
            else:
                conn.execute(
                    update(settings).where(settings.c.id == existing.id).values(value=value)
                )
        logger.debug("Setting saved: %s", key)

    def delete(self, key: str) -> None:
        with self._engine.begin() as conn:
            conn.execute(delete(settings).where(self._where(key)))


class SqlDiscountRequirementStore:
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @staticmethod
    def _to_model(row: object) -> DiscountRequirement:
        return DiscountRequirement(
            id=row.id,  # type: ignore[attr-defined]
            discount_id=row.discount_id,  # type: ignore[attr-defined]
            rule_system_name=row.rule_system_name,  # type: ignore[attr-defined]
        )

    def get_all_requirements(self) -> list[DiscountRequirement]:
        with self._engine.connect() as conn:
            rows = conn.execute(
                select(discount_requirements).order_by(discount_requirements.c.id)
            ).fetchall()
        return [self._to_model(row) for row in rows]

    def get(self, requirement_id: int) -> DiscountRequirement | None:
        with self._engine.connect() as conn:
            row = conn.execute(
                select(discount_requirements).where(discount_requirements.c.id == requirement_id)
            ).first()
        return self._to_model(row) if row is not None else None

    def insert(self, requirement: DiscountRequirement) -> DiscountRequirement:
        """Insert *requirement* and return it with its assigned id."""
        values = requirement.model_dump(exclude_none=True)
        with self._engine.begin() as conn:
            result = conn.execute(insert(discount_requirements).values(**values))
            requirement_id = result.inserted_primary_key[0]
        logger.debug("Discount requirement %s inserted", requirement_id)
        return requirement.model_copy(update={"id": requirement_id})

    def delete(self, requirement: DiscountRequirement) -> None:
        if requirement.id is None:
            return
        with self._engine.begin() as conn:
            conn.execute(
                delete(discount_requirements).where(discount_requirements.c.id == requirement.id)
            )
        logger.debug("Discount requirement %s deleted", requirement.id)


class SqlLocalizationResourceStore:
    """String resources for one language."""

    def __init__(self, engine: Engine, *, language_id: int = 1) -> None:
        self._engine = engine
        self._language_id = language_id

    def _where(self, resource_key: str) -> ColumnElement[bool]:
        return (locale_string_resources.c.resource_name == resource_key.lower()) & (
            locale_string_resources.c.language_id == self._language_id
        )

    def add_or_update(self, resource_key: str, default_value: str) -> None:
        with self._engine.begin() as conn:
            existing = conn.execute(
                select(locale_string_resources.c.id).where(self._where(resource_key))
            ).first()
            if existing is None:
                conn.execute(
                    insert(locale_string_resources).values(
                        language_id=self._language_id,
                        resource_name=resource_key.lower(),
                        resource_value=default_value,
                    )
                )
            else:
                conn.execute(
                    update(locale_string_resources)
                    .where(locale_string_resources.c.id == existing.id)
                    .values(resource_value=default_value)
                )

    def get(self, resource_key: str) -> str | None:
        with self._engine.connect() as conn:
            row = conn.execute(
                select(locale_string_resources.c.resource_value).where(self._where(resource_key))
            ).first()
        return row.resource_value if row is not None else None

    def delete(self, resource_key: str) -> None:
        with self._engine.begin() as conn:
            conn.execute(delete(locale_string_resources).where(self._where(resource_key)))

    def keys(self) -> list[str]:
        """Stored resource names (lower-cased) for this language, sorted."""
        with self._engine.connect() as conn:
            rows = conn.execute(
                select(locale_string_resources.c.resource_name)
                .where(locale_string_resources.c.language_id == self._language_id)
                .order_by(locale_string_resources.c.resource_name)
            ).fetchall()
        return [row.resource_name for row in rows]
