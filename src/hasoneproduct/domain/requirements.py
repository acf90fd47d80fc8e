"""Discount requirement records and the validation request/result contract."""

from __future__ import annotations

from pydantic import BaseModel

from hasoneproduct.domain.cart import Customer, Store

SYSTEM_NAME = "DiscountRequirement.HasOneProduct"
SETTINGS_KEY_TEMPLATE = "DiscountRequirement.HasOneProduct-{}"


def settings_key(discount_requirement_id: int) -> str:
    """Namespaced settings key holding a requirement's restricted products."""
    return SETTINGS_KEY_TEMPLATE.format(discount_requirement_id)


class DiscountRequirement(BaseModel):
    """A rule attached to a discount; ``id`` is None until stored."""

    model_config = {"frozen": True}

    id: int | None = None
    discount_id: int
    rule_system_name: str


class ValidationRequest(BaseModel):
    """Everything a rule needs to decide whether a requirement is met."""

    model_config = {"frozen": True}

    discount_requirement_id: int
    customer: Customer | None = None
    store: Store


class ValidationResult(BaseModel):
    """Outcome of a requirement check.  Invalid unless proven otherwise."""

    model_config = {"frozen": True}

    is_valid: bool = False
