"""In-process identity provider."""

from __future__ import annotations

import logging
from typing import override

from .base import IdentityCallback, IdentityProvider, Unsubscribe

logger = logging.getLogger(__name__)


class LocalIdentityProvider(IdentityProvider):
    """Identity held in process, changed explicitly with sign_in / sign_out.

    Stands in for the external identity service in development, tests, and
    embeddings where the host application already knows who the user is.
    """

    def __init__(self, user_id: str | None = None) -> None:
        self._user_id = user_id
        self._callbacks: list[IdentityCallback] = []

    @override
    def current_user_id(self) -> str | None:
        return self._user_id

    @override
    def on_identity_change(self, callback: IdentityCallback) -> Unsubscribe:
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def sign_in(self, user_id: str) -> None:
        if not user_id:
            raise ValueError("user_id cannot be empty")
        self._set(user_id)

    def sign_out(self) -> None:
        self._set(None)

    def _set(self, user_id: str | None) -> None:
        if user_id == self._user_id:
            return
        logger.info(f"Identity changed from {self._user_id} to {user_id}")
        self._user_id = user_id
        for callback in tuple(self._callbacks):
            callback(user_id)
