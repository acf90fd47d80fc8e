"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, hasoneproduct.toml only
contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    database: str = "hasoneproduct.db"
    default_store_id: int = 1
    settings_store_id: int = 0  # 0 = settings shared by all stores
    language_id: int = 1


class RoutingConfig(BaseModel):
    """[routing] section."""

    model_config = {"frozen": True}

    area: str = "Admin"
    base_path: str = "/"
