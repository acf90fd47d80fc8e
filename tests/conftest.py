"""Shared pytest fixtures and test helpers for hasoneproduct tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from hasoneproduct.config.settings import RuleSettings
from hasoneproduct.domain.cart import Customer, ShoppingCartItem, ShoppingCartType
from hasoneproduct.infrastructure.backend import Backend
from hasoneproduct.infrastructure.memory import (
    InMemoryDiscountRequirementStore,
    InMemoryLocalizationResourceStore,
    InMemorySettingsStore,
)
from hasoneproduct.infrastructure.routing import RouteTable
from hasoneproduct.plugins.builtins.has_one_product import HasOneProductRule


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def backend(tmp_path: Path) -> Iterator[Backend]:
    """Backend on a fresh SQLite database in a temp directory."""
    settings = RuleSettings.from_cli(root=tmp_path)
    b = Backend(settings)
    try:
        yield b
    finally:
        b.close()


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_root")``.
    """
    monkeypatch.delenv("HASONEPRODUCT_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings_store() -> InMemorySettingsStore:
    return InMemorySettingsStore()


@pytest.fixture
def requirement_store() -> InMemoryDiscountRequirementStore:
    return InMemoryDiscountRequirementStore()


@pytest.fixture
def locale_store() -> InMemoryLocalizationResourceStore:
    return InMemoryLocalizationResourceStore()


@pytest.fixture
def rule(
    settings_store: InMemorySettingsStore,
    requirement_store: InMemoryDiscountRequirementStore,
    locale_store: InMemoryLocalizationResourceStore,
) -> HasOneProductRule:
    """The built-in rule wired to in-memory stores."""
    return HasOneProductRule(
        settings=settings_store,
        requirements=requirement_store,
        locales=locale_store,
        routing=RouteTable(),
    )


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_customer(
    *lines: tuple[int, int],
    store_id: int = 1,
    cart_type: ShoppingCartType = ShoppingCartType.SHOPPING_CART,
    customer_id: int = 1,
) -> Customer:
    """Build a customer from ``(product_id, quantity)`` pairs."""
    return Customer(
        id=customer_id,
        shopping_cart_items=[
            ShoppingCartItem(
                product_id=product_id,
                quantity=quantity,
                store_id=store_id,
                shopping_cart_type=cart_type,
            )
            for product_id, quantity in lines
        ],
    )
