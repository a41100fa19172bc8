"""Models package for the scenario core."""

from .status import ScenarioStatus
from .scenario import (
    EXPECTED_EVENT_COUNT,
    AlternativePath,
    PathEvent,
    Scenario,
    ScenarioFields,
    ScenarioSummary,
)
from .patch import FieldsPatch, ScenarioPatch, StatusPatch

__all__ = [
    "ScenarioStatus",
    "EXPECTED_EVENT_COUNT",
    "AlternativePath",
    "PathEvent",
    "Scenario",
    "ScenarioFields",
    "ScenarioSummary",
    "ScenarioPatch",
    "FieldsPatch",
    "StatusPatch",
]
