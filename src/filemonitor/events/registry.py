"""Thread-safe ordered observer lists, one per event kind."""
import threading
import types
from collections.abc import Callable
from dataclasses import dataclass

from filemonitor.events.types import ChangeEvent, EventKind

ObserverCallback = Callable[[ChangeEvent], None]


def _find(
    observers: list[ObserverCallback],
    predicate: Callable[[ObserverCallback], bool],
) -> int | None:
    for index, registered in enumerate(observers):
        if predicate(registered):
            return index
    return None


@dataclass(frozen=True, slots=True)
class Subscription:
    """Handle returned by a registration, used to unregister it later."""

    registry: "ObserverRegistry"
    kind: EventKind
    callback: ObserverCallback

    def cancel(self) -> bool:
        """Remove this registration.

        Returns:
            True if a matching entry was still registered.
        """
        return self.registry.remove(self.kind, self.callback)


class ObserverRegistry:
    """Ordered callback lists with a register/unregister/snapshot protocol.

    Readers take an immutable snapshot under the lock and iterate it outside
    the lock, so observers may be added or removed while a dispatch is in
    flight, including from inside an observer.
    """

    def __init__(self) -> None:
        self._observers: dict[EventKind, list[ObserverCallback]] = {kind: [] for kind in EventKind}
        self._lock = threading.Lock()

    def add(self, kind: EventKind | str, callback: ObserverCallback) -> Subscription:
        """Append a callback to the list for a kind.

        Args:
            kind: Event kind or its string value.
            callback: Callable invoked with each ChangeEvent.

        Returns:
            Subscription handle for later removal.

        Raises:
            ValueError: If kind is unknown.
            TypeError: If callback is not callable.
        """
        event_kind = EventKind(kind)
        if not callable(callback):
            raise TypeError(f"Observer must be callable, got {type(callback).__name__}")

        with self._lock:
            self._observers[event_kind].append(callback)

        return Subscription(registry=self, kind=event_kind, callback=callback)

    def remove(self, kind: EventKind | str, callback: ObserverCallback) -> bool:
        """Remove the first entry that is callback.

        Bound methods are matched by equality, since every attribute
        lookup creates a new method object for the same function and owner.

        Args:
            kind: Event kind or its string value.
            callback: Previously registered callable.

        Returns:
            True if an entry was removed.
        """
        event_kind = EventKind(kind)
        with self._lock:
            observers = self._observers[event_kind]
            index = _find(observers, lambda registered: registered is callback)
            if index is None and isinstance(callback, types.MethodType):
                index = _find(observers, lambda registered: registered == callback)
            if index is None:
                return False
            del observers[index]
        return True

    def snapshot(self, kind: EventKind) -> tuple[ObserverCallback, ...]:
        """Registered observers for a kind, in registration order."""
        with self._lock:
            return tuple(self._observers[kind])

    def count(self, kind: EventKind | None = None) -> int:
        """Number of registrations for a kind, or across all kinds."""
        with self._lock:
            if kind is not None:
                return len(self._observers[EventKind(kind)])
            return sum(len(observers) for observers in self._observers.values())
