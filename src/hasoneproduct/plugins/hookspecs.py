"""Pluggy hook specifications for discount requirement rules.

A rule plugin decides whether a discount requirement is met, points the
admin UI at its configuration screen, and registers/removes its own
resources on install and uninstall.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from hasoneproduct.domain.requirements import ValidationRequest, ValidationResult

PROJECT_NAME = "hasoneproduct"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class DiscountRuleHookSpec:
    """Hook specifications for discount requirement rules."""

    @hookspec(firstresult=True)
    def check_requirement(self, request: ValidationRequest | None) -> ValidationResult:
        """Check a discount requirement against the request's customer cart."""

    @hookspec(firstresult=True)
    def get_configuration_url(
        self,
        discount_id: int,
        discount_requirement_id: int | None,
    ) -> str:
        """Return the admin URL of the rule's configuration screen."""

    @hookspec
    def install(self) -> None:
        """Register the rule's resources."""

    @hookspec
    def uninstall(self) -> None:
        """Remove the rule's resources and every requirement using it."""
