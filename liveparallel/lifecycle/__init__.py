"""Scenario lifecycle: status transitions and their orchestration."""

from .transitions import TRANSITIONS, can_generate, can_transition, ensure_transition, is_editable
from .callbacks import LifecycleCallback, LifecycleCallbacks, LoggingLifecycleCallback
from .controller import ScenarioLifecycleController

__all__ = [
    "TRANSITIONS",
    "can_generate",
    "can_transition",
    "ensure_transition",
    "is_editable",
    "LifecycleCallback",
    "LifecycleCallbacks",
    "LoggingLifecycleCallback",
    "ScenarioLifecycleController",
]
