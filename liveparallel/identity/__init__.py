"""Identity provider interface and local implementation."""

from .base import IdentityCallback, IdentityProvider, Unsubscribe
from .local import LocalIdentityProvider

__all__ = ["IdentityCallback", "IdentityProvider", "Unsubscribe", "LocalIdentityProvider"]
