"""Scenario lifecycle status."""

from __future__ import annotations

from enum import Enum


class ScenarioStatus(str, Enum):
    """Lifecycle status of a scenario."""

    PENDING = "pending"
    GENERATING = "generating"
    COMPLETED = "completed"
    ERROR = "error"
