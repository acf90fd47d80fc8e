"""LifecycleService — install, uninstall and admin URL for a rule."""

from __future__ import annotations

from hasoneproduct.plugins.builtins.has_one_product import LOCALE_RESOURCES
from hasoneproduct.plugins.manager import UnknownRuleError
from hasoneproduct.services.base import BaseService
from hasoneproduct.services.result import ServiceResult
from hasoneproduct.services.telemetry import traced


class LifecycleService(BaseService):
    @traced
    def install(self) -> ServiceResult:
        op = "install"
        try:
            self._rules.install(self._rule_name)
        except UnknownRuleError:
            return self._unknown_rule(op)
        resources = [key for key in LOCALE_RESOURCES if self._backend.locales.get(key) is not None]
        return ServiceResult(
            ok=True,
            op=op,
            data={"rule": self._rule_name, "resources": resources},
        )

    @traced
    def uninstall(self) -> ServiceResult:
        """Remove the rule's resources and every requirement that uses it."""
        op = "uninstall"
        before = self._owned_requirement_ids()
        try:
            self._rules.uninstall(self._rule_name)
        except UnknownRuleError:
            return self._unknown_rule(op)
        removed = sorted(set(before) - set(self._owned_requirement_ids()))
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "rule": self._rule_name,
                "requirements_removed": removed,
                "resources_removed": list(LOCALE_RESOURCES),
            },
        )

    @traced
    def configuration_url(
        self, discount_id: int, discount_requirement_id: int | None = None
    ) -> ServiceResult:
        op = "configuration_url"
        try:
            url = self._rules.get_configuration_url(
                self._rule_name, discount_id, discount_requirement_id
            )
        except UnknownRuleError:
            return self._unknown_rule(op)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "discount_id": discount_id,
                "discount_requirement_id": discount_requirement_id,
                "url": url,
            },
        )

    def _owned_requirement_ids(self) -> list[int]:
        return [
            r.id
            for r in self._backend.requirements.get_all_requirements()
            if r.rule_system_name == self._rule_name and r.id is not None
        ]
