"""In-memory collaborator stores.

Dict-backed implementations of the contracts in
:mod:`hasoneproduct.infrastructure.contracts`, for embedding the rule in
a host that keeps its own state and for tests.
"""

from __future__ import annotations

from hasoneproduct.domain.requirements import DiscountRequirement


class InMemorySettingsStore:
    """Keys are case-insensitive."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = {k.lower(): v for k, v in (values or {}).items()}

    def get_by_key(self, key: str) -> str | None:
        return self._values.get(key.lower())

    def set_value(self, key: str, value: str) -> None:
        self._values[key.lower()] = value

    def delete(self, key: str) -> None:
        self._values.pop(key.lower(), None)


class InMemoryDiscountRequirementStore:
    def __init__(self, requirements: list[DiscountRequirement] | None = None) -> None:
        self._rows: dict[int, DiscountRequirement] = {}
        self._next_id = 1
        for requirement in requirements or []:
            self.insert(requirement)

    def get_all_requirements(self) -> list[DiscountRequirement]:
        return list(self._rows.values())

    def get(self, requirement_id: int) -> DiscountRequirement | None:
        return self._rows.get(requirement_id)

    def insert(self, requirement: DiscountRequirement) -> DiscountRequirement:
        """Store *requirement*, assigning the next id when it has none."""
        requirement_id = requirement.id if requirement.id is not None else self._next_id
        stored = requirement.model_copy(update={"id": requirement_id})
        self._rows[requirement_id] = stored
        self._next_id = max(self._next_id, requirement_id + 1)
        return stored

    def delete(self, requirement: DiscountRequirement) -> None:
        if requirement.id is not None:
            self._rows.pop(requirement.id, None)


class InMemoryLocalizationResourceStore:
    """Resource names are case-insensitive and stored lower-cased."""

    def __init__(self) -> None:
        self._resources: dict[str, str] = {}

    def add_or_update(self, resource_key: str, default_value: str) -> None:
        self._resources[resource_key.lower()] = default_value

    def get(self, resource_key: str) -> str | None:
        return self._resources.get(resource_key.lower())

    def delete(self, resource_key: str) -> None:
        self._resources.pop(resource_key.lower(), None)

    def keys(self) -> list[str]:
        return sorted(self._resources)
