"""Application state owned by the composition root."""

from __future__ import annotations

import logging

from ..identity.base import IdentityProvider, Unsubscribe
from .cache import ScenarioCollectionCache

logger = logging.getLogger(__name__)


class AppState:
    """Session-wide state: who is signed in and their scenario collection.

    Created once by the composition root and passed to the components that need it.
    When the signed-in user changes, the collection is cleared so one user's
    scenarios are never shown to another.
    """

    def __init__(self, identity: IdentityProvider, scenarios: ScenarioCollectionCache) -> None:
        self.identity = identity
        self.scenarios = scenarios
        self._user_id = identity.current_user_id()
        self._unsubscribe: Unsubscribe | None = identity.on_identity_change(self._on_identity_change)

    @property
    def user_id(self) -> str | None:
        return self.identity.current_user_id()

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def _on_identity_change(self, user_id: str | None) -> None:
        if user_id != self._user_id:
            logger.info(f"Clearing scenario collection after identity change to {user_id}")
            self.scenarios.clear()
        self._user_id = user_id

    def close(self) -> None:
        """Stop following identity changes."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
