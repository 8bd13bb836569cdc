"""Named events dispatched concurrently to registered handlers."""

from __future__ import annotations

import abc
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


class HandlerAlreadyRegisteredError(Exception):
    """Raised when a handler is registered twice for the same event."""

    def __init__(self, message: str = "handler already registered") -> None:
        super().__init__(message)


@dataclass
class Event:
    """Something that happened, identified by its name."""

    name: str
    payload: Any = None
    date_time: datetime = field(default_factory=datetime.now)


class EventHandler(abc.ABC):
    """Reacts to events it has been registered for."""

    @abc.abstractmethod
    def handle(self, event: Event) -> None:
        """Process one event."""


class EventDispatcher:
    """Keeps handlers per event name and runs them when an event fires."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def register(self, event_name: str, handler: EventHandler) -> None:
        """Add a handler for an event; the same handler may not be added twice."""
        handlers = self._handlers.setdefault(event_name, [])
        if any(existing is handler for existing in handlers):
            raise HandlerAlreadyRegisteredError()
        handlers.append(handler)

    def dispatch(self, event: Event) -> None:
        """Run every handler of the event concurrently and wait for all of them.

        If a handler raises, the first failure in registration order is
        raised once all handlers have finished.
        """
        handlers = list(self._handlers.get(event.name, ()))
        if not handlers:
            return
        with ThreadPoolExecutor(max_workers=len(handlers)) as pool:
            futures = [pool.submit(handler.handle, event) for handler in handlers]
        for future in futures:
            future.result()

    def has(self, event_name: str, handler: EventHandler) -> bool:
        """Tell whether the handler is registered for the event."""
        return any(existing is handler for existing in self._handlers.get(event_name, ()))

    def remove(self, event_name: str, handler: EventHandler) -> None:
        """Unregister a handler; nothing happens if it was not registered."""
        handlers = self._handlers.get(event_name)
        if handlers is None:
            return
        for position, existing in enumerate(handlers):
            if existing is handler:
                del handlers[position]
                return

    def clear(self) -> None:
        """Forget every registered handler."""
        self._handlers = {}

    def handlers_for(self, event_name: str) -> tuple[EventHandler, ...]:
        """The handlers of an event, in registration order."""
        return tuple(self._handlers.get(event_name, ()))

    def event_names(self) -> list[str]:
        """The names of the events that have been registered."""
        return list(self._handlers)