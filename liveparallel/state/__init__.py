"""Client-side state: the scenario collection cache and the application state."""

from .cache import ScenarioCollectionCache
from .app_state import AppState

__all__ = ["ScenarioCollectionCache", "AppState"]
