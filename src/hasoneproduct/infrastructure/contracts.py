"""Collaborator interfaces consumed by discount requirement rules.

Rules receive these explicitly at construction time; any object with
matching methods satisfies them (in-memory fakes, SQLite stores, or a
host platform's adapters).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping

    from hasoneproduct.domain.requirements import DiscountRequirement


class SettingsStore(Protocol):
    """Key-value settings storage."""

    def get_by_key(self, key: str) -> str | None: ...

    def set_value(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class DiscountRequirementStore(Protocol):
    """Discount requirement records."""

    def get_all_requirements(self) -> list[DiscountRequirement]: ...

    def get(self, requirement_id: int) -> DiscountRequirement | None: ...

    def insert(self, requirement: DiscountRequirement) -> DiscountRequirement: ...

    def delete(self, requirement: DiscountRequirement) -> None: ...


class LocalizationResourceStore(Protocol):
    """Localized UI string resources."""

    def add_or_update(self, resource_key: str, default_value: str) -> None: ...

    def get(self, resource_key: str) -> str | None: ...

    def delete(self, resource_key: str) -> None: ...


class RoutingHelper(Protocol):
    """Builds URLs for controller actions."""

    def build_action_url(
        self, action: str, controller: str, route_values: Mapping[str, Any]
    ) -> str: ...
