"""
Minimal synchronous event emitter.
"""
from typing import Callable, Generic, List, TypeVar

V = TypeVar("V")


class EventEmitter(Generic[V]):
    """Calls every registered listener, in registration order, on ``emit``."""

    def __init__(self):
        self._listeners: List[Callable[[V], None]] = []

    def on(self, listener: Callable[[V], None]) -> None:
        self._listeners.append(listener)

    def off(self, listener: Callable[[V], None]) -> None:
        """Remove a listener; unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, value: V) -> None:
        for listener in list(self._listeners):
            listener(value)
