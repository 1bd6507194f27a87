"""Lifecycle events and their dispatcher.

The Sentry client announces setup and every capture through an
``EventManager`` so host code can inspect or adjust the pipeline:
tag the scope before a capture, record the event id afterwards, etc.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from sentry_bridge.core.logging import get_logger

Listener = Callable[["Event"], Any]


@dataclass
class Event:
    """An event passed to listeners.

    Attributes:
        name: Event name (see ``ClientEvents``)
        subject: The object that dispatched the event
        data: Event payload; listeners may modify it in place
        result: Value returned by the last listener that returned one
    """

    name: str
    subject: Any = None
    data: Dict[str, Any] = field(default_factory=dict)
    result: Any = None
    _stopped: bool = field(default=False, repr=False)

    def get_data(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def stop_propagation(self) -> None:
        """Prevent listeners registered after the current one from running."""
        self._stopped = True

    @property
    def is_stopped(self) -> bool:
        return self._stopped


class EventManager:
    """Registers listeners by event name and dispatches events to them."""

    _instance: Optional["EventManager"] = None

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = {}
        self.logger = get_logger("events")

    @classmethod
    def instance(cls) -> "EventManager":
        """Process-wide default manager, for hosts that don't pass their own."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        cls._instance = None

    def on(self, name: str, listener: Listener) -> Listener:
        """Register ``listener`` for ``name`` and return it."""
        self._listeners.setdefault(name, []).append(listener)
        return listener

    def off(self, name: str, listener: Optional[Listener] = None) -> None:
        """Remove one listener, or every listener for ``name`` when none is given."""
        if listener is None:
            self._listeners.pop(name, None)
            return
        listeners = self._listeners.get(name, [])
        if listener in listeners:
            listeners.remove(listener)

    def listeners(self, name: str) -> List[Listener]:
        return list(self._listeners.get(name, []))

    def dispatch(self, event: Event) -> Event:
        """Call every listener for the event in registration order.

        A failing listener is logged and skipped; the capture pipeline
        carries on with the remaining listeners.
        """
        for listener in self.listeners(event.name):
            try:
                result = listener(event)
            except Exception as e:
                self.logger.error(
                    "event_listener_failed",
                    event_name=event.name,
                    listener=getattr(listener, "__qualname__", repr(listener)),
                    error=str(e)[:200],
                )
                continue
            if result is not None:
                event.result = result
            if event.is_stopped:
                break
        return event
