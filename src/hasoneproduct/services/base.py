"""BaseService — foundation for the rule services.

Every service receives a :class:`Backend` at construction time and
dispatches rule operations through a :class:`RuleManager`.  When no
manager is given, one is built with the built-in rules wired to the
backend's stores.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hasoneproduct.domain.requirements import SYSTEM_NAME
from hasoneproduct.plugins.manager import create_rule_manager
from hasoneproduct.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from hasoneproduct.infrastructure.backend import Backend
    from hasoneproduct.plugins.manager import RuleManager


class BaseService:
    """Base for service-layer classes.

    Usage::

        class RequirementService(BaseService):
            def check(self, requirement_id: int, ...) -> ServiceResult:
                result = self._rules.check_requirement(self._rule_name, request)
                ...
    """

    def __init__(
        self,
        backend: Backend,
        rules: RuleManager | None = None,
        *,
        rule_name: str = SYSTEM_NAME,
    ) -> None:
        self._backend = backend
        self._rules = rules if rules is not None else create_rule_manager(backend)
        self._rule_name = rule_name

    def _unknown_rule(self, op: str) -> ServiceResult:
        return ServiceResult.failure(
            op, ErrorCode.UNKNOWN_RULE, f"No rule registered as {self._rule_name}"
        )
