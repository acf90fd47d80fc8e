"""Backend — the single dependency injected into every service.

Owns the SQLite engine and the collaborator stores built on top of it,
plus the admin route table.  Created lazily by the CLI so ``--help``
never touches the database.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hasoneproduct.infrastructure.database.engine import init_database
from hasoneproduct.infrastructure.routing import RouteTable
from hasoneproduct.infrastructure.stores import (
    SqlDiscountRequirementStore,
    SqlLocalizationResourceStore,
    SqlSettingsStore,
)

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from hasoneproduct.config.settings import RuleSettings

logger = logging.getLogger(__name__)


class Backend:
    """Stores and routing for one data root."""

    def __init__(self, settings: RuleSettings) -> None:
        self._settings = settings
        self._engine = init_database(settings.root, settings.store.database)
        self.settings_store = SqlSettingsStore(
            self._engine, store_id=settings.store.settings_store_id
        )
        self.requirements = SqlDiscountRequirementStore(self._engine)
        self.locales = SqlLocalizationResourceStore(
            self._engine, language_id=settings.store.language_id
        )
        self.routing = RouteTable(
            area=settings.routing.area,
            base_path=settings.routing.base_path,
        )
        logger.debug("Backend opened at %s", settings.root)

    @property
    def root(self) -> Path:
        return self._settings.root

    @property
    def settings(self) -> RuleSettings:
        return self._settings

    @property
    def engine(self) -> Engine:
        return self._engine

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self._engine.dispose()
