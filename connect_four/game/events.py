"""
events.py - Synchronous publish/subscribe channel

Each Event is one notification channel with its own listener list. The
board engine owns one Event per notification, and the view owns the Event
that carries user input back to the engine.
"""

from typing import Any, Callable, List

from connect_four.debug import debug

Listener = Callable[..., Any]


class Event:
    """A named list of listeners, called in registration order."""

    def __init__(self, name: str = "event"):
        self.name = name
        self._listeners: List[Listener] = []

    def add_listener(self, listener: Listener) -> None:
        """Register a listener. Registering the same callable twice calls it twice."""
        self._listeners.append(listener)
        debug.trace(f"Listener added to '{self.name}' ({len(self._listeners)} total)", "events")

    def remove_listener(self, listener: Listener) -> bool:
        """
        Unregister the first registration of a listener.

        Returns:
            True if the listener was registered, False otherwise
        """
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def trigger(self, *args: Any) -> None:
        """Call every listener with args. A listener's exception propagates."""
        debug.trace(f"Triggering '{self.name}' for {len(self._listeners)} listener(s)", "events")
        # copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(*args)

    def __len__(self) -> int:
        return len(self._listeners)

    def __repr__(self) -> str:
        return f"Event({self.name!r}, listeners={len(self._listeners)})"
