"""
Fire-and-forget notification channel used to tell other parts of the
application that startup finished or that the watched folders changed.
"""

import logging
from collections.abc import Callable
from enum import Enum

log = logging.getLogger(__name__)


class AppEvent(Enum):
    """Events broadcast by the core. They carry no payload."""

    STARTUP_COMPLETED = "startup_completed"
    FOLDERS_CHANGED = "folders_changed"
    REFRESH_DEMOS = "refresh_demos"


Subscriber = Callable[[AppEvent], None]


class EventChannel:
    """Delivers events to subscribers in subscription order."""

    def __init__(self):
        self._subscribers: list[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def publish(self, event: AppEvent) -> None:
        """
        Sends `event` to every subscriber. A failing subscriber is logged and
        does not prevent delivery to the others.
        """
        log.debug(f"Publishing event '{event.value}'.")
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception as e:
                log.warning(f"Subscriber failed while handling '{event.value}': {e}")
