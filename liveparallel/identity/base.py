"""Identity provider interface."""

import abc
from collections.abc import Callable

type IdentityCallback = Callable[[str | None], None]
type Unsubscribe = Callable[[], None]


class IdentityProvider(abc.ABC):
    """Supplies the signed-in user's id and notifies when it changes.

    Credential flows live with the external identity service; the scenario core only
    needs the opaque user id.
    """

    @abc.abstractmethod
    def current_user_id(self) -> str | None:
        """The signed-in user's id, or None if nobody is signed in."""
        ...

    @abc.abstractmethod
    def on_identity_change(self, callback: IdentityCallback) -> Unsubscribe:
        """Register a callback invoked with the new user id (or None) on every change.

        Returns:
            A function that removes the callback
        """
        ...
