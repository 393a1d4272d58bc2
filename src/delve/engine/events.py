"""Synchronous event bus.

Listeners receive every published event in subscription order. A listener
that raises is logged and skipped; delivery to the remaining listeners
continues.
"""

from __future__ import annotations

from collections.abc import Callable

from delve.core.logging import get_logger
from delve.models.events import EventBase


logger = get_logger(__name__)

Listener = Callable[[EventBase], None]


class EventBus:
    """Fan-out of game events to subscribed listeners."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener.

        Args:
            listener: Callable invoked with each event.

        Returns:
            A callable that unsubscribes the listener.
        """
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a listener; unknown listeners are ignored."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            logger.debug("Unsubscribe of unknown listener ignored")

    def publish(self, event: EventBase) -> None:
        """Deliver ``event`` to every listener.

        Args:
            event: The event to deliver.
        """
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(
                    "Event listener failed",
                    event_kind=getattr(event, "kind", type(event).__name__),
                )


__all__ = [
    "Listener",
    "EventBus",
]
