"""Tests for RequirementService — check, configure, show."""

from __future__ import annotations

from hasoneproduct.domain.requirements import SYSTEM_NAME, DiscountRequirement, settings_key
from hasoneproduct.infrastructure.backend import Backend
from hasoneproduct.services.requirement import RequirementService
from hasoneproduct.services.telemetry import disable_telemetry, enable_telemetry
from tests.conftest import make_customer


def _configure(backend: Backend, products: str, discount_id: int = 1) -> int:
    result = RequirementService(backend).configure(discount_id, products)
    assert result.ok, result.error
    return result.data["discount_requirement_id"]


class TestConfigure:
    def test_creates_requirement(self, backend: Backend) -> None:
        result = RequirementService(backend).configure(12, "77,123 :2, 156:3-8")
        assert result.ok
        assert result.op == "configure"
        requirement_id = result.data["discount_requirement_id"]
        assert result.data["restricted_products"] == "77, 123:2, 156:3-8"
        assert result.data["setting_key"] == settings_key(requirement_id)
        stored = backend.requirements.get(requirement_id)
        assert stored == DiscountRequirement(
            id=requirement_id, discount_id=12, rule_system_name=SYSTEM_NAME
        )
        assert backend.settings_store.get_by_key(settings_key(requirement_id)) == (
            "77, 123:2, 156:3-8"
        )

    def test_updates_existing(self, backend: Backend) -> None:
        requirement_id = _configure(backend, "77", discount_id=3)
        result = RequirementService(backend).configure(
            3, "88:1", discount_requirement_id=requirement_id
        )
        assert result.ok
        assert backend.settings_store.get_by_key(settings_key(requirement_id)) == "88:1"
        assert len(backend.requirements.get_all_requirements()) == 1

    def test_empty_clears_restriction(self, backend: Backend) -> None:
        requirement_id = _configure(backend, "77")
        result = RequirementService(backend).configure(
            1, "  ", discount_requirement_id=requirement_id
        )
        assert result.ok
        assert backend.settings_store.get_by_key(settings_key(requirement_id)) is None

    def test_rejects_malformed_token(self, backend: Backend) -> None:
        result = RequirementService(backend).configure(1, "77, 5:x")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_CONFIGURATION"
        assert result.error.detail == {"token": "5:x"}
        assert backend.requirements.get_all_requirements() == []

    def test_rejects_malformed_plain_id(self, backend: Backend) -> None:
        result = RequirementService(backend).configure(1, "abc")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_CONFIGURATION"

    def test_unknown_requirement(self, backend: Backend) -> None:
        result = RequirementService(backend).configure(1, "77", discount_requirement_id=99)
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_requirement_of_other_discount(self, backend: Backend) -> None:
        requirement_id = _configure(backend, "77", discount_id=1)
        result = RequirementService(backend).configure(
            2, "77", discount_requirement_id=requirement_id
        )
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_requirement_of_other_rule(self, backend: Backend) -> None:
        other = backend.requirements.insert(
            DiscountRequirement(discount_id=1, rule_system_name="DiscountRequirement.Other")
        )
        result = RequirementService(backend).configure(1, "77", discount_requirement_id=other.id)
        assert result.error is not None
        assert result.error.code == "WRONG_RULE"


class TestCheck:
    def test_valid_cart(self, backend: Backend) -> None:
        requirement_id = _configure(backend, "123:2")
        result = RequirementService(backend).check(
            requirement_id, customer=make_customer((123, 1), (123, 1))
        )
        assert result.ok
        assert result.op == "check_requirement"
        assert result.data["is_valid"] is True
        assert result.data["store_id"] == 1
        assert result.data["cart"] == [{"product_id": 123, "total_quantity": 2}]
        assert result.warnings == []

    def test_invalid_cart_is_still_ok_result(self, backend: Backend) -> None:
        requirement_id = _configure(backend, "123:3")
        result = RequirementService(backend).check(
            requirement_id, customer=make_customer((123, 2))
        )
        assert result.ok
        assert result.data["is_valid"] is False

    def test_store_override(self, backend: Backend) -> None:
        requirement_id = _configure(backend, "77")
        customer = make_customer((77, 1), store_id=2)
        svc = RequirementService(backend)
        assert svc.check(requirement_id, customer=customer).data["is_valid"] is False
        assert svc.check(requirement_id, customer=customer, store_id=2).data["is_valid"] is True

    def test_no_customer(self, backend: Backend) -> None:
        requirement_id = _configure(backend, "77")
        result = RequirementService(backend).check(requirement_id, customer=None)
        assert result.data["is_valid"] is False
        assert result.data["cart"] == []

    def test_unknown_requirement_warns_and_passes(self, backend: Backend) -> None:
        result = RequirementService(backend).check(42, customer=make_customer((1, 1)))
        assert result.ok
        assert result.data["is_valid"] is True
        assert result.warnings == ["No stored discount requirement with ID 42"]

    def test_malformed_stored_value_fails_closed(self, backend: Backend) -> None:
        requirement_id = _configure(backend, "5")
        backend.settings_store.set_value(settings_key(requirement_id), "77:abc, 5")
        result = RequirementService(backend).check(requirement_id, customer=make_customer((5, 1)))
        assert result.ok
        assert result.data["is_valid"] is False

    def test_verbose_span_records_verdict(self, backend: Backend) -> None:
        requirement_id = _configure(backend, "77")
        enable_telemetry()
        try:
            result = RequirementService(backend).check(
                requirement_id, customer=make_customer((77, 1))
            )
        finally:
            disable_telemetry()
        assert result.meta is not None
        rule_span = result.meta["telemetry"]["children"][0]
        assert rule_span["name"] == "rule.check_requirement"
        assert rule_span["annotations"] == {
            "rule": SYSTEM_NAME,
            "discount_requirement_id": requirement_id,
            "is_valid": True,
        }

    def test_unknown_rule_name(self, backend: Backend) -> None:
        result = RequirementService(backend, rule_name="Missing").check(1, customer=None)
        assert result.error is not None
        assert result.error.code == "UNKNOWN_RULE"


class TestShow:
    def test_show_parsed(self, backend: Backend) -> None:
        requirement_id = _configure(backend, "77, 156:3-8", discount_id=4)
        result = RequirementService(backend).show(requirement_id)
        assert result.ok
        assert result.data["discount_id"] == 4
        assert result.data["restricted_products"] == "77, 156:3-8"
        assert result.data["constraints"] == [
            {"kind": "any", "product_id": 77},
            {"kind": "range", "product_id": 156, "min_quantity": 3, "max_quantity": 8},
        ]
        assert result.data["malformed"] == []

    def test_show_reports_malformed(self, backend: Backend) -> None:
        requirement_id = _configure(backend, "77")
        backend.settings_store.set_value(settings_key(requirement_id), "77, abc, 5:x")
        result = RequirementService(backend).show(requirement_id)
        assert result.data["malformed"] == ["abc", "5:x"]
        assert len(result.warnings) == 2

    def test_show_missing(self, backend: Backend) -> None:
        result = RequirementService(backend).show(5)
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
