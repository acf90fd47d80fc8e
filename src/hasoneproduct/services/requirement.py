"""RequirementService — check, configure and inspect restricted-product requirements."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hasoneproduct.domain.cart import Store, aggregate_cart
from hasoneproduct.domain.constraints import (
    ConstraintParseError,
    format_restricted_products,
    parse_restricted_products,
    parse_token,
    split_tokens,
)
from hasoneproduct.domain.requirements import (
    DiscountRequirement,
    ValidationRequest,
    settings_key,
)
from hasoneproduct.plugins.manager import UnknownRuleError
from hasoneproduct.services.base import BaseService
from hasoneproduct.services.result import ErrorCode, ServiceResult
from hasoneproduct.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from hasoneproduct.domain.cart import Customer

logger = logging.getLogger(__name__)


class RequirementService(BaseService):
    """Operations on the requirements handled by one rule."""

    @traced
    def check(
        self,
        discount_requirement_id: int,
        *,
        customer: Customer | None,
        store_id: int | None = None,
    ) -> ServiceResult:
        """Run the rule's requirement check for *customer* in *store_id*."""
        op = "check_requirement"
        warnings: list[str] = []
        store = Store(id=store_id if store_id is not None else self._default_store_id)

        if self._backend.requirements.get(discount_requirement_id) is None:
            warnings.append(f"No stored discount requirement with ID {discount_requirement_id}")

        request = ValidationRequest(
            discount_requirement_id=discount_requirement_id,
            customer=customer,
            store=store,
        )
        with trace_span("rule.check_requirement") as span:
            try:
                result = self._rules.check_requirement(self._rule_name, request)
            except UnknownRuleError:
                return self._unknown_rule(op)
            if span is not None:
                span.annotate("rule", self._rule_name)
                span.annotate("discount_requirement_id", discount_requirement_id)
                span.annotate("is_valid", bool(result is not None and result.is_valid))

        cart = (
            aggregate_cart(customer.shopping_cart_items, store.id) if customer is not None else []
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "discount_requirement_id": discount_requirement_id,
                "is_valid": bool(result is not None and result.is_valid),
                "store_id": store.id,
                "restricted_products": self._stored(discount_requirement_id),
                "cart": [line.model_dump() for line in cart],
            },
            warnings=warnings,
        )

    @traced
    def configure(
        self,
        discount_id: int,
        restricted_products: str,
        *,
        discount_requirement_id: int | None = None,
    ) -> ServiceResult:
        """Save the restricted product list for a requirement.

        Without *discount_requirement_id* a new requirement is attached to
        *discount_id* first.  An empty list clears the restriction.
        """
        op = "configure"

        try:
            constraints = parse_restricted_products(restricted_products)
        except ConstraintParseError as exc:
            return ServiceResult.failure(
                op,
                ErrorCode.INVALID_CONFIGURATION,
                str(exc),
                token=exc.token,
            )

        requirements = self._backend.requirements
        if discount_requirement_id is None:
            requirement = requirements.insert(
                DiscountRequirement(discount_id=discount_id, rule_system_name=self._rule_name)
            )
        else:
            requirement = requirements.get(discount_requirement_id)
            if requirement is None or requirement.discount_id != discount_id:
                return ServiceResult.failure(
                    op,
                    ErrorCode.NOT_FOUND,
                    f"Discount {discount_id} has no requirement with ID {discount_requirement_id}",
                )
            if requirement.rule_system_name != self._rule_name:
                return ServiceResult.failure(
                    op,
                    ErrorCode.WRONG_RULE,
                    f"Requirement {discount_requirement_id} belongs to "
                    f"{requirement.rule_system_name}",
                )

        assert requirement.id is not None
        key = settings_key(requirement.id)
        canonical = format_restricted_products(constraints)
        if canonical:
            self._backend.settings_store.set_value(key, canonical)
        else:
            self._backend.settings_store.delete(key)
        logger.info("Requirement %s configured: %r", requirement.id, canonical)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "discount_id": discount_id,
                "discount_requirement_id": requirement.id,
                "restricted_products": canonical,
                "setting_key": key,
            },
        )

    @traced
    def show(self, discount_requirement_id: int) -> ServiceResult:
        """Return a requirement's stored list and how each token parses."""
        op = "show"
        requirement = self._backend.requirements.get(discount_requirement_id)
        if requirement is None:
            return ServiceResult.failure(
                op,
                ErrorCode.NOT_FOUND,
                f"No discount requirement with ID {discount_requirement_id}",
            )

        stored = self._stored(discount_requirement_id)
        constraints: list[dict[str, object]] = []
        malformed: list[str] = []
        for token in split_tokens(stored):
            try:
                constraints.append(parse_token(token).model_dump())
            except ConstraintParseError:
                malformed.append(token)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "discount_requirement_id": discount_requirement_id,
                "discount_id": requirement.discount_id,
                "rule_system_name": requirement.rule_system_name,
                "restricted_products": stored,
                "constraints": constraints,
                "malformed": malformed,
            },
            warnings=[f"Malformed token: {token!r}" for token in malformed],
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def _default_store_id(self) -> int:
        return self._backend.settings.store.default_store_id

    def _stored(self, discount_requirement_id: int) -> str:
        value = self._backend.settings_store.get_by_key(settings_key(discount_requirement_id))
        return value or ""
