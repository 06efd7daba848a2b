"""
Auth State Events

Explicit replacement for a global auth-state subscription. A notifier is
created once per application and handed to the services that emit events;
listeners register with subscribe() and tear down with the returned
Subscription.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.schemas.auth import AuthUser

logger = logging.getLogger(__name__)


class AuthEvent(str, Enum):
    SIGNED_UP = "SIGNED_UP"
    SIGNED_IN = "SIGNED_IN"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"
    USER_UPDATED = "USER_UPDATED"


AuthListener = Callable[[AuthEvent, Optional["AuthUser"], str], None]


class Subscription:
    """Handle returned by subscribe(); call unsubscribe() on disposal."""

    def __init__(self, notifier: "AuthStateNotifier", key: int):
        self._notifier = notifier
        self._key = key

    @property
    def active(self) -> bool:
        return self._notifier.has_listener(self._key)

    def unsubscribe(self) -> None:
        self._notifier.remove(self._key)


class AuthStateNotifier:
    """Fan-out of auth events to registered listeners."""

    def __init__(self):
        self._listeners: Dict[int, AuthListener] = {}
        self._next_key = 0

    def subscribe(self, listener: AuthListener) -> Subscription:
        key = self._next_key
        self._next_key += 1
        self._listeners[key] = listener
        return Subscription(self, key)

    def remove(self, key: int) -> None:
        self._listeners.pop(key, None)

    def has_listener(self, key: int) -> bool:
        return key in self._listeners

    def __len__(self) -> int:
        return len(self._listeners)

    def emit(self, event: AuthEvent, user: Optional["AuthUser"], email: str) -> None:
        """
        Deliver an event to every listener.

        A listener that raises is logged and skipped; the remaining
        listeners and the caller are unaffected.
        """
        for listener in list(self._listeners.values()):
            try:
                listener(event, user, email)
            except Exception:
                logger.exception(f"Auth listener failed for {event.value}")


def audit_log_listener(event: AuthEvent, user: Optional["AuthUser"], email: str) -> None:
    """Default listener: one log line per auth event."""
    user_id = user.id if user else "-"
    logger.info(f"auth event={event.value} email={email} user_id={user_id}")
