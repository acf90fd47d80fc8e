"""Built-in "customer has one of these products" discount requirement rule.

The admin stores a comma-separated list of restricted products per
requirement, each optionally with a quantity or an inclusive quantity
range::

    77, 123:2, 156:3-8

The requirement is met when the customer's shopping cart (in the
current store) holds any listed product with the listed quantity.  An
empty list means no restriction.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hasoneproduct.domain.cart import aggregate_cart
from hasoneproduct.domain.constraints import evaluate, split_tokens
from hasoneproduct.domain.requirements import SYSTEM_NAME, ValidationResult, settings_key
from hasoneproduct.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from hasoneproduct.domain.requirements import ValidationRequest
    from hasoneproduct.infrastructure.contracts import (
        DiscountRequirementStore,
        LocalizationResourceStore,
        RoutingHelper,
        SettingsStore,
    )

logger = logging.getLogger(__name__)

CONFIGURE_ACTION = "Configure"
CONFIGURE_CONTROLLER = "DiscountRulesHasOneProduct"

RESOURCE_PREFIX = "Plugins.DiscountRules.HasOneProduct.Fields.Products"

LOCALE_RESOURCES: dict[str, str] = {
    RESOURCE_PREFIX: "Restricted products [and quantity range]",
    f"{RESOURCE_PREFIX}.Hint": (
        "The comma-separated list of product identifiers (e.g. 77, 123, 156). "
        "You can find a product ID on its details page. You can also specify the "
        "comma-separated list of product identifiers with quantities "
        "({Product ID}:{Quantity}. for example, 77:1, 123:2, 156:3). And you can "
        "also specify the comma-separated list of product identifiers with quantity "
        "range ({Product ID}:{Min quantity}-{Max quantity}. for example, 77:1-3, "
        "123:2-5, 156:3-8)."
    ),
    f"{RESOURCE_PREFIX}.AddNew": "Add product",
    f"{RESOURCE_PREFIX}.Choose": "Choose",
}


class HasOneProductRule:
    """Discount requirement met by any one restricted product in the cart."""

    system_name = SYSTEM_NAME

    def __init__(
        self,
        *,
        settings: SettingsStore,
        requirements: DiscountRequirementStore,
        locales: LocalizationResourceStore,
        routing: RoutingHelper,
    ) -> None:
        self._settings = settings
        self._requirements = requirements
        self._locales = locales
        self._routing = routing

    # ------------------------------------------------------------------
    # Requirement check
    # ------------------------------------------------------------------

    @hookimpl
    def check_requirement(self, request: ValidationRequest | None) -> ValidationResult:
        """Check whether the request's cart satisfies the stored product list.

        Raises:
            ValueError: if *request* is None.
        """
        if request is None:
            raise ValueError("request is required")

        restricted_products = self._settings.get_by_key(
            settings_key(request.discount_requirement_id)
        )
        if not restricted_products or not restricted_products.strip():
            return ValidationResult(is_valid=True)

        if request.customer is None:
            return ValidationResult()

        tokens = split_tokens(restricted_products)
        if not tokens:
            return ValidationResult()

        cart = aggregate_cart(request.customer.shopping_cart_items, request.store.id)
        outcome = evaluate(tokens, cart)

        for token in outcome.skipped:
            logger.debug("Skipped malformed product id %r", token)
        if outcome.aborted_on is not None:
            logger.debug(
                "Requirement %s: malformed quantity token %r, failing",
                request.discount_requirement_id,
                outcome.aborted_on,
            )
            return ValidationResult()

        if outcome.found:
            logger.debug(
                "Requirement %s met by %s",
                request.discount_requirement_id,
                outcome.matched,
            )
            return ValidationResult(is_valid=True)
        return ValidationResult()

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    @hookimpl
    def get_configuration_url(self, discount_id: int, discount_requirement_id: int | None) -> str:
        url = self._routing.build_action_url(
            CONFIGURE_ACTION,
            CONFIGURE_CONTROLLER,
            {"discountId": discount_id, "discountRequirementId": discount_requirement_id},
        )
        return url.removeprefix("/")

    @hookimpl
    def install(self) -> None:
        for key, value in LOCALE_RESOURCES.items():
            self._locales.add_or_update(key, value)

    @hookimpl
    def uninstall(self) -> None:
        for requirement in self._requirements.get_all_requirements():
            if requirement.rule_system_name == SYSTEM_NAME:
                self._requirements.delete(requirement)
                logger.debug("Deleted discount requirement %s", requirement.id)

        for key in LOCALE_RESOURCES:
            self._locales.delete(key)
