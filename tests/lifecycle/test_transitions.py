"""Tests for the scenario status transition table."""

import pytest

from liveparallel.errors import InvalidState
from liveparallel.lifecycle.transitions import (
    TRANSITIONS,
    can_generate,
    can_transition,
    ensure_transition,
    is_editable,
)
from liveparallel.models.status import ScenarioStatus

PENDING = ScenarioStatus.PENDING
GENERATING = ScenarioStatus.GENERATING
COMPLETED = ScenarioStatus.COMPLETED
ERROR = ScenarioStatus.ERROR


def test_every_status_has_an_entry() -> None:
    assert set(TRANSITIONS) == set(ScenarioStatus)


@pytest.mark.parametrize("current,target", [
    (PENDING, GENERATING),
    (GENERATING, COMPLETED),
    (GENERATING, ERROR),
    (ERROR, GENERATING),
])
def test_legal_transitions(current: ScenarioStatus, target: ScenarioStatus) -> None:
    assert can_transition(current, target)
    ensure_transition(current, target, "s1")


@pytest.mark.parametrize("current,target", [
    (PENDING, COMPLETED),
    (PENDING, ERROR),
    (GENERATING, GENERATING),
    (GENERATING, PENDING),
    (ERROR, COMPLETED),
    (COMPLETED, GENERATING),
    (COMPLETED, ERROR),
    (COMPLETED, PENDING),
])
def test_illegal_transitions(current: ScenarioStatus, target: ScenarioStatus) -> None:
    assert not can_transition(current, target)
    with pytest.raises(InvalidState) as exc_info:
        ensure_transition(current, target, "s1")
    assert exc_info.value.scenario_id == "s1"


def test_completed_is_terminal() -> None:
    assert TRANSITIONS[COMPLETED] == frozenset()


def test_generation_allowed_from_pending_and_error_only() -> None:
    assert [status for status in ScenarioStatus if can_generate(status)] == [PENDING, ERROR]


def test_edits_blocked_only_while_generating() -> None:
    assert not is_editable(GENERATING)
    assert all(is_editable(status) for status in (PENDING, COMPLETED, ERROR))
