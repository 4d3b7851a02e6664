"""Synchronous named-event emitter.

Listeners run in registration order on the caller's stack.  Exceptions
raised by a listener propagate to whoever called :meth:`EventEmitter.emit`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

_logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


@dataclass(slots=True)
class _Registration:
    listener: Listener
    once: bool = False


class EventEmitter:
    """Register, remove and fire listeners by event name."""

    def __init__(self) -> None:
        self._events: dict[str, list[_Registration]] = {}

    def on(self, event: str, listener: Listener) -> EventEmitter:
        """Call *listener* every time *event* fires."""
        self._add(event, listener, once=False)
        return self

    add_listener = on

    def once(self, event: str, listener: Listener) -> EventEmitter:
        """Call *listener* the next time *event* fires, then remove it."""
        self._add(event, listener, once=True)
        return self

    def off(self, event: str, listener: Listener) -> EventEmitter:
        """Remove the most recently added registration of *listener*.

        Removing a listener that is not registered is a no-op.
        """
        registrations = self._events.get(event)
        if not registrations:
            return self
        for index in range(len(registrations) - 1, -1, -1):
            if registrations[index].listener == listener:
                del registrations[index]
                break
        if not registrations:
            del self._events[event]
        return self

    remove_listener = off

    def remove_all_listeners(self, event: str | None = None) -> EventEmitter:
        if event is None:
            self._events.clear()
        else:
            self._events.pop(event, None)
        return self

    def listeners(self, event: str) -> list[Listener]:
        return [registration.listener for registration in self._events.get(event, ())]

    def listener_count(self, event: str) -> int:
        return len(self._events.get(event, ()))

    def event_names(self) -> list[str]:
        return list(self._events)

    def emit(self, event: str, *args: Any) -> bool:
        """Fire *event* with *args*.

        The listener list is copied before dispatch, so listeners added or
        removed while the event is firing take effect from the next emit.
        Returns whether any listener was registered.
        """
        registrations = self._events.get(event)
        if not registrations:
            return False

        snapshot = list(registrations)
        for registration in snapshot:
            if registration.once:
                self._discard(event, registration)
            try:
                registration.listener(*args)
            except Exception:
                _logger.debug("Listener for event=%s raised", event, exc_info=True)
                raise
        return True

    def _add(self, event: str, listener: Listener, *, once: bool) -> None:
        if not callable(listener):
            raise TypeError(f"listener for {event!r} must be callable, got {type(listener).__name__}")
        self._events.setdefault(event, []).append(_Registration(listener, once=once))

    def _discard(self, event: str, registration: _Registration) -> None:
        registrations = self._events.get(event)
        if registrations is None:
            return
        for index, candidate in enumerate(registrations):
            if candidate is registration:
                del registrations[index]
                break
        if not registrations:
            del self._events[event]
