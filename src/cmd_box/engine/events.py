"""Observer interface owned by each interpreter.

Listeners are called synchronously in the order they subscribed. The
wildcard event ``all`` receives every notification, prefixed with the event
name, after the event's own listeners.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from cmd_box.utils.logging import get_logger

logger = get_logger(__name__)

Listener = Callable[..., Any]

ALL_EVENTS = "all"

# Public notification names
INITIALIZED = "initialized"
COMMAND = "command"
STACK_CHANGED = "stackChanged"
CHANGED = "changed"
BEFORE_UNDO = "beforeUndo"
AFTER_UNDO = "afterUndo"
BEFORE_REDO = "beforeRedo"
AFTER_REDO = "afterRedo"
STDOUT = "stdout"
ERROR = "error"


@dataclass(eq=False)
class Subscription:
    """Handle returned by :meth:`EventEmitter.on`.

    Attributes:
        event: The event name the listener is attached to.
        callback: The listener itself.
    """

    event: str
    callback: Listener
    _emitter: "EventEmitter | None" = field(default=None, repr=False)

    @property
    def active(self) -> bool:
        """Whether the listener is still attached."""
        return self._emitter is not None

    def unsubscribe(self) -> None:
        """Detach the listener. Calling twice is harmless."""
        if self._emitter is not None:
            self._emitter._remove(self)
            self._emitter = None


class EventEmitter:
    """Named-event fan-out with explicit unsubscribe handles."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Subscription]] = {}

    def on(self, events: str, callback: Listener) -> list[Subscription] | Subscription:
        """Subscribe ``callback`` to one or more space-separated events.

        Returns:
            A single :class:`Subscription` for one event, or a list of them
            when several event names were given.
        """
        names = events.split()
        if not names:
            raise ValueError("At least one event name is required")
        subs = []
        for name in names:
            sub = Subscription(event=name, callback=callback, _emitter=self)
            self._listeners.setdefault(name, []).append(sub)
            logger.debug("Subscribed to %s", name)
            subs.append(sub)
        return subs[0] if len(subs) == 1 else subs

    def off(self, events: str | None = None, callback: Listener | None = None) -> None:
        """Remove listeners.

        With no arguments every listener is removed. With ``events`` only
        those events are cleared, optionally restricted to ``callback``.
        """
        if events is None:
            names = list(self._listeners)
        else:
            names = events.split()
        for name in names:
            for sub in list(self._listeners.get(name, [])):
                if callback is None or sub.callback == callback:
                    sub.unsubscribe()

    def emit(self, event: str, *payload: Any) -> None:
        """Notify listeners of ``event`` and then the wildcard listeners."""
        # Snapshot so listeners may unsubscribe while being notified
        for sub in list(self._listeners.get(event, [])):
            sub.callback(*payload)
        if event != ALL_EVENTS:
            for sub in list(self._listeners.get(ALL_EVENTS, [])):
                sub.callback(event, *payload)

    def listener_count(self, event: str | None = None) -> int:
        """Count listeners for one event, or for all events."""
        if event is not None:
            return len(self._listeners.get(event, []))
        return sum(len(subs) for subs in self._listeners.values())

    def _remove(self, sub: Subscription) -> None:
        subs = self._listeners.get(sub.event)
        if not subs:
            return
        try:
            subs.remove(sub)
        except ValueError:
            logger.debug("Listener for %r already removed", sub.event)
            return
        logger.debug("Unsubscribed from %s", sub.event)
        if not subs:
            del self._listeners[sub.event]
