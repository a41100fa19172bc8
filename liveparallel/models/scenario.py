"""Scenario models: the user's life decision and its generated alternative path."""

from __future__ import annotations

from datetime import datetime

import attrs

from .status import ScenarioStatus

EXPECTED_EVENT_COUNT = 3


@attrs.frozen
class PathEvent:
    """One consequence in an alternative life path."""

    title: str
    description: str  # one paragraph describing the consequence
    outcome: str  # one sentence
    timestamp: datetime

    def __str__(self) -> str:
        return f"{self.title}: {self.outcome}"


@attrs.frozen
class AlternativePath:
    """Generated narrative attached to a completed scenario."""

    summary: str
    events: tuple[PathEvent, ...]

    def __attrs_post_init__(self) -> None:
        if not self.events:
            raise ValueError("An alternative path needs at least one event")

    @property
    def is_well_formed(self) -> bool:
        """Whether this path has the shape generation must produce.

        Exactly EXPECTED_EVENT_COUNT events, each with a non-empty title, description and outcome.
        """
        return len(self.events) == EXPECTED_EVENT_COUNT and all(
            event.title.strip() and event.description.strip() and event.outcome.strip()
            for event in self.events
        )


@attrs.frozen
class ScenarioFields:
    """User-supplied fields for a new scenario.

    Validated by the form layer before they get here.
    """

    title: str
    description: str
    choice: str
    context: str | None = None


@attrs.frozen
class Scenario:
    """A user-authored life decision record."""

    id: str
    owner_id: str
    title: str
    description: str
    choice: str
    status: ScenarioStatus
    created_at: datetime
    updated_at: datetime
    context: str | None = None
    alternative_path: AlternativePath | None = None

    def __attrs_post_init__(self) -> None:
        """A path is present if and only if the scenario is completed."""
        has_path = self.alternative_path is not None
        if has_path != (self.status == ScenarioStatus.COMPLETED):
            raise ValueError(
                f"Scenario {self.id} has status {self.status.value} "
                f"{'with' if has_path else 'without'} an alternative path"
            )

    @property
    def summary(self) -> ScenarioSummary:
        return ScenarioSummary.from_scenario(self)

    def __str__(self) -> str:
        return f"Scenario {self.id} [{self.status.value}]: {self.title}"


@attrs.frozen
class ScenarioSummary:
    """The projection of a scenario kept in the collection cache."""

    id: str
    title: str
    description: str
    status: ScenarioStatus
    created_at: datetime

    @staticmethod
    def from_scenario(scenario: Scenario) -> ScenarioSummary:
        return ScenarioSummary(
            id=scenario.id,
            title=scenario.title,
            description=scenario.description,
            status=scenario.status,
            created_at=scenario.created_at,
        )
