"""Tests for the built-in HasOneProduct discount requirement rule."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import pytest

from hasoneproduct.domain.cart import Customer, ShoppingCartType, Store
from hasoneproduct.domain.requirements import (
    SYSTEM_NAME,
    DiscountRequirement,
    ValidationRequest,
    settings_key,
)
from hasoneproduct.infrastructure.memory import (
    InMemoryDiscountRequirementStore,
    InMemoryLocalizationResourceStore,
    InMemorySettingsStore,
)
from hasoneproduct.plugins.builtins.has_one_product import (
    LOCALE_RESOURCES,
    RESOURCE_PREFIX,
    HasOneProductRule,
)
from tests.conftest import make_customer

REQUIREMENT_ID = 7

Configure = Callable[[str], None]


def _request(customer: Customer | None = None, *, store_id: int = 1) -> ValidationRequest:
    return ValidationRequest(
        discount_requirement_id=REQUIREMENT_ID,
        customer=customer,
        store=Store(id=store_id),
    )


@pytest.fixture
def configure(settings_store: InMemorySettingsStore) -> Configure:
    def _configure(value: str) -> None:
        settings_store.set_value(settings_key(REQUIREMENT_ID), value)

    return _configure


class TestCheckRequirement:
    def test_none_request_raises(self, rule: HasOneProductRule) -> None:
        with pytest.raises(ValueError):
            rule.check_requirement(None)

    def test_unconfigured_is_valid(self, rule: HasOneProductRule) -> None:
        assert rule.check_requirement(_request()).is_valid is True

    @pytest.mark.parametrize("value", ["", " ", "\t\n  "])
    def test_blank_configuration_is_valid(
        self, rule: HasOneProductRule, configure: Configure, value: str
    ) -> None:
        configure(value)
        assert rule.check_requirement(_request()).is_valid is True
        assert rule.check_requirement(_request(make_customer())).is_valid is True

    def test_missing_customer_is_invalid(
        self, rule: HasOneProductRule, configure: Configure
    ) -> None:
        configure("77")
        assert rule.check_requirement(_request()).is_valid is False

    def test_only_separators_is_invalid(
        self, rule: HasOneProductRule, configure: Configure
    ) -> None:
        configure(" , ,, ")
        assert rule.check_requirement(_request(make_customer((77, 1)))).is_valid is False

    @pytest.mark.parametrize(
        ("value", "lines", "expected"),
        [
            ("77", [(77, 2)], True),
            ("123:2", [(123, 2)], True),
            ("123:3", [(123, 2)], False),
            ("156:3-8", [(156, 5)], True),
            ("156:9-10", [(156, 5)], False),
            ("77:abc", [(77, 1)], False),
            ("77:abc,123", [(123, 1)], False),
            ("abc", [(77, 1)], False),
            ("abc, 77", [(77, 1)], True),
            ("10:3", [(10, 1), (10, 2)], True),
            ("10:8-3", [(10, 5)], False),
            ("77, 123:2, 156:3-8", [(156, 8)], True),
            ("99", [(77, 1)], False),
        ],
    )
    def test_configured_products(
        self,
        rule: HasOneProductRule,
        configure: Configure,
        value: str,
        lines: list[tuple[int, int]],
        expected: bool,
    ) -> None:
        configure(value)
        result = rule.check_requirement(_request(make_customer(*lines)))
        assert result.is_valid is expected

    def test_reversed_range_never_matches(
        self, rule: HasOneProductRule, configure: Configure
    ) -> None:
        configure("10:8-3")
        for quantity in range(1, 12):
            result = rule.check_requirement(_request(make_customer((10, quantity))))
            assert result.is_valid is False

    def test_other_store_items_ignored(self, rule: HasOneProductRule, configure: Configure) -> None:
        configure("77")
        customer = make_customer((77, 1), store_id=2)
        assert rule.check_requirement(_request(customer, store_id=1)).is_valid is False
        assert rule.check_requirement(_request(customer, store_id=2)).is_valid is True

    def test_wishlist_items_ignored(self, rule: HasOneProductRule, configure: Configure) -> None:
        configure("77")
        customer = make_customer((77, 1), cart_type=ShoppingCartType.WISHLIST)
        assert rule.check_requirement(_request(customer)).is_valid is False

    def test_settings_key_is_per_requirement(
        self, rule: HasOneProductRule, settings_store: InMemorySettingsStore
    ) -> None:
        settings_store.set_value(settings_key(REQUIREMENT_ID + 1), "77")
        # Requirement 7 has no list of its own, so it is unrestricted.
        assert rule.check_requirement(_request(make_customer((1, 1)))).is_valid is True

    def test_stateless_between_calls(self, rule: HasOneProductRule, configure: Configure) -> None:
        configure("77:abc, 5")
        first = rule.check_requirement(_request(make_customer((5, 1))))
        configure("5")
        second = rule.check_requirement(_request(make_customer((5, 1))))
        assert (first.is_valid, second.is_valid) == (False, True)


class TestConfigurationUrl:
    def test_new_requirement(self, rule: HasOneProductRule) -> None:
        url = rule.get_configuration_url(discount_id=5, discount_requirement_id=None)
        assert url == "Admin/DiscountRulesHasOneProduct/Configure?discountId=5"

    def test_existing_requirement(self, rule: HasOneProductRule) -> None:
        url = rule.get_configuration_url(discount_id=5, discount_requirement_id=9)
        assert url == (
            "Admin/DiscountRulesHasOneProduct/Configure?discountId=5&discountRequirementId=9"
        )

    def test_strips_only_one_leading_slash(
        self,
        settings_store: InMemorySettingsStore,
        requirement_store: InMemoryDiscountRequirementStore,
        locale_store: InMemoryLocalizationResourceStore,
    ) -> None:
        class _Routing:
            def build_action_url(
                self, action: str, controller: str, route_values: Mapping[str, Any]
            ) -> str:
                return f"//{controller}/{action}"

        rule = HasOneProductRule(
            settings=settings_store,
            requirements=requirement_store,
            locales=locale_store,
            routing=_Routing(),
        )
        assert rule.get_configuration_url(1, None) == "/DiscountRulesHasOneProduct/Configure"


class TestInstallUninstall:
    def test_install_adds_four_resources(
        self, rule: HasOneProductRule, locale_store: InMemoryLocalizationResourceStore
    ) -> None:
        rule.install()
        assert len(locale_store.keys()) == 4
        assert (
            locale_store.get("Plugins.DiscountRules.HasOneProduct.Fields.Products")
            == "Restricted products [and quantity range]"
        )
        assert locale_store.get("Plugins.DiscountRules.HasOneProduct.Fields.Products.AddNew") == (
            "Add product"
        )

    def test_install_is_repeatable(
        self, rule: HasOneProductRule, locale_store: InMemoryLocalizationResourceStore
    ) -> None:
        locale_store.add_or_update(f"{RESOURCE_PREFIX}.Choose", "x")
        rule.install()
        rule.install()
        assert len(locale_store.keys()) == 4
        assert locale_store.get("Plugins.DiscountRules.HasOneProduct.Fields.Products.Choose") == (
            "Choose"
        )

    def test_uninstall_removes_own_requirements_and_resources(
        self,
        rule: HasOneProductRule,
        requirement_store: InMemoryDiscountRequirementStore,
        locale_store: InMemoryLocalizationResourceStore,
    ) -> None:
        rule.install()
        locale_store.add_or_update("Other.Resource", "keep")
        requirement_store.insert(DiscountRequirement(discount_id=1, rule_system_name=SYSTEM_NAME))
        other = requirement_store.insert(
            DiscountRequirement(discount_id=1, rule_system_name="DiscountRequirement.Other")
        )
        requirement_store.insert(DiscountRequirement(discount_id=2, rule_system_name=SYSTEM_NAME))

        rule.uninstall()

        assert requirement_store.get_all_requirements() == [other]
        assert locale_store.keys() == ["other.resource"]
        for key in LOCALE_RESOURCES:
            assert locale_store.get(key) is None

    def test_uninstall_without_install(self, rule: HasOneProductRule) -> None:
        rule.uninstall()  # delete-if-present: nothing to remove is fine
