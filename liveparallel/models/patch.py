"""Typed partial updates to a scenario.

Each patch lists only the fields its operation may touch. Applying a patch builds the
merged scenario, so the scenario invariants are checked before anything is written.
"""

from __future__ import annotations

import abc
from datetime import datetime
from typing import override

import attrs

from .scenario import AlternativePath, Scenario
from .status import ScenarioStatus


class ScenarioPatch(abc.ABC):
    """A partial update to a scenario."""

    @abc.abstractmethod
    def apply(self, scenario: Scenario, updated_at: datetime) -> Scenario:
        """Return the scenario with this patch merged in and updated_at set.

        Raises:
            ValueError: if the merged scenario would violate its invariants
        """
        ...


def _require_non_empty(name: str):
    def validator(instance: object, attribute: attrs.Attribute, value: str | None) -> None:
        if value is not None and not value.strip():
            raise ValueError(f"{name} cannot be empty")
    return validator


@attrs.frozen
class FieldsPatch(ScenarioPatch):
    """User edits to the free-text fields of a scenario.

    None leaves a field unchanged. An empty context clears it.
    """

    title: str | None = attrs.field(default=None, validator=_require_non_empty("title"))
    description: str | None = attrs.field(default=None, validator=_require_non_empty("description"))
    choice: str | None = attrs.field(default=None, validator=_require_non_empty("choice"))
    context: str | None = None

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in attrs.astuple(self))

    @override
    def apply(self, scenario: Scenario, updated_at: datetime) -> Scenario:
        changes: dict[str, object] = {
            name: value
            for name, value in attrs.asdict(self).items()
            if value is not None
        }
        if self.context is not None and not self.context.strip():
            changes["context"] = None
        return attrs.evolve(scenario, **changes, updated_at=updated_at)


@attrs.frozen
class StatusPatch(ScenarioPatch):
    """Status change made by the lifecycle controller.

    The status and the alternative path are always written together.
    """

    status: ScenarioStatus
    alternative_path: AlternativePath | None = None

    @override
    def apply(self, scenario: Scenario, updated_at: datetime) -> Scenario:
        return attrs.evolve(scenario, status=self.status, alternative_path=self.alternative_path,
                            updated_at=updated_at)
