"""Rule registration and per-rule hook dispatch.

Several rules may be registered at once; every dispatch is restricted to
the one rule named by its system name, so rules never answer for each
other.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pluggy

from hasoneproduct.plugins.hookspecs import PROJECT_NAME, DiscountRuleHookSpec

if TYPE_CHECKING:
    from hasoneproduct.domain.requirements import ValidationRequest, ValidationResult
    from hasoneproduct.infrastructure.backend import Backend

logger = logging.getLogger(__name__)


class UnknownRuleError(KeyError):
    """No rule is registered under the requested system name."""


class RuleManager:
    """Manages rule registration and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(DiscountRuleHookSpec)

    def register_rule(self, rule: object, name: str | None = None) -> str:
        """Register a rule instance under *name* (default: its ``system_name``)."""
        resolved_name = name or getattr(rule, "system_name", None) or rule.__class__.__name__
        self._pm.register(rule, name=resolved_name)
        logger.debug("Registered rule: %s", resolved_name)
        return resolved_name

    def unregister(self, name: str) -> None:
        self._pm.unregister(name=name)

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching to every registered rule."""
        return self._pm.hook

    def list_rule_names(self) -> list[str]:
        """Return names of all registered rules."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def has_rule(self, name: str) -> bool:
        return self._pm.get_plugin(name) is not None

    def get_rule(self, name: str) -> object:
        rule = self._pm.get_plugin(name)
        if rule is None:
            raise UnknownRuleError(name)
        return rule

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _caller(self, name: str, hook_name: str) -> pluggy.HookCaller:
        """Return *hook_name*'s caller restricted to the rule called *name*."""
        target = self.get_rule(name)
        others = [p for p in self._pm.get_plugins() if p is not target]
        return self._pm.subset_hook_caller(hook_name, remove_plugins=others)

    def check_requirement(
        self, name: str, request: ValidationRequest | None
    ) -> ValidationResult | None:
        return self._caller(name, "check_requirement")(request=request)

    def get_configuration_url(
        self, name: str, discount_id: int, discount_requirement_id: int | None
    ) -> str | None:
        return self._caller(name, "get_configuration_url")(
            discount_id=discount_id,
            discount_requirement_id=discount_requirement_id,
        )

    def install(self, name: str) -> None:
        self._caller(name, "install")()
        logger.info("Rule installed: %s", name)

    def uninstall(self, name: str) -> None:
        self._caller(name, "uninstall")()
        logger.info("Rule uninstalled: %s", name)


def create_rule_manager(backend: Backend) -> RuleManager:
    """Build a manager with the built-in rules wired to *backend*'s stores."""
    from hasoneproduct.plugins.builtins.has_one_product import HasOneProductRule

    manager = RuleManager()
    manager.register_rule(
        HasOneProductRule(
            settings=backend.settings_store,
            requirements=backend.requirements,
            locales=backend.locales,
            routing=backend.routing,
        )
    )
    return manager
