"""The scenario status state machine.

Every status change goes through this table; nothing else decides which
transitions are legal.
"""

from collections.abc import Mapping

from ..errors import InvalidState
from ..models.status import ScenarioStatus

TRANSITIONS: Mapping[ScenarioStatus, frozenset[ScenarioStatus]] = {
    ScenarioStatus.PENDING: frozenset({ScenarioStatus.GENERATING}),
    ScenarioStatus.GENERATING: frozenset({ScenarioStatus.COMPLETED, ScenarioStatus.ERROR}),
    ScenarioStatus.ERROR: frozenset({ScenarioStatus.GENERATING}),  # retry
    ScenarioStatus.COMPLETED: frozenset(),
}


def can_transition(current: ScenarioStatus, target: ScenarioStatus) -> bool:
    return target in TRANSITIONS[current]


def ensure_transition(current: ScenarioStatus, target: ScenarioStatus, scenario_id: str) -> None:
    """Raise InvalidState unless current -> target is a legal transition."""
    if not can_transition(current, target):
        raise InvalidState(
            f"Scenario {scenario_id} cannot move from {current.value} to {target.value}", scenario_id
        )


def can_generate(status: ScenarioStatus) -> bool:
    """Whether a generate request is acceptable in this status."""
    return can_transition(status, ScenarioStatus.GENERATING)


def is_editable(status: ScenarioStatus) -> bool:
    """User edits are allowed in every status except while generating."""
    return status != ScenarioStatus.GENERATING
