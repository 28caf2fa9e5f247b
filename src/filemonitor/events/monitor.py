"""Event monitor that normalizes watch source notifications for observers."""

import os
from collections.abc import Callable
from datetime import UTC, datetime

import structlog

from filemonitor.events.registry import ObserverCallback, ObserverRegistry, Subscription
from filemonitor.events.source import WatchSource, file_size
from filemonitor.events.types import ChangeEvent, EventKind, RawChange

logger = structlog.get_logger()


def utcnow() -> datetime:
    """Current wall-clock time in UTC."""
    return datetime.now(UTC)


def best_effort_size(path: str) -> int:
    """File size in bytes, or 0 if it cannot be read.

    Args:
        path: File to inspect.

    Returns:
        Size in bytes, 0 when the file vanished or is unreadable.
    """
    try:
        return file_size(path)
    except (OSError, ValueError):
        return 0


class EventMonitor:
    """Watches a directory and republishes changes as ChangeEvents.

    Wraps one WatchSource, subscribes to its four raw notification kinds
    at construction and fans each normalized event out to the observers
    registered for that kind, synchronously and in registration order.

    Raw notifications arrive on the watchdog observer thread. Observer
    lists and the delivery switch are safe to use from any thread.

    Attributes:
        directory: Absolute path of the watched directory.
        name_filter: File name filter applied by the source.
    """

    def __init__(
        self,
        directory_path: str | os.PathLike[str],
        name_filter: str = "*.*",
        *,
        recursive: bool = False,
        propagate_observer_errors: bool = False,
        source_factory: Callable[..., WatchSource] = WatchSource,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize event monitor.

        Args:
            directory_path: Directory to watch, validated when monitoring starts.
            name_filter: Shell-style file name filter.
            recursive: Watch subdirectories as well.
            propagate_observer_errors: Let the first failing observer abort
                delivery and raise, instead of logging and continuing.
            source_factory: Builds the watch source from
                (directory, name_filter, recursive=...).
            clock: Returns the timestamp for each event.
        """
        self._source = source_factory(directory_path, name_filter, recursive=recursive)
        self._observers = ObserverRegistry()
        self._propagate_observer_errors = propagate_observer_errors
        self._clock = clock

        for kind in EventKind:
            self._source.subscribe(kind, self._on_raw_change)

    @property
    def directory(self) -> str:
        """Absolute path of the watched directory."""
        return self._source.directory

    @property
    def name_filter(self) -> str:
        """File name filter applied by the source."""
        return self._source.name_filter

    @property
    def source(self) -> WatchSource:
        """The underlying watch source."""
        return self._source

    @property
    def is_monitoring(self) -> bool:
        """Whether events are currently delivered."""
        return self._source.enabled

    def on(self, kind: EventKind | str, callback: ObserverCallback) -> Subscription:
        """Register an observer for one kind of change.

        The same callback may be registered more than once and is then
        invoked once per registration.

        Args:
            kind: Event kind or its string value.
            callback: Callable invoked with each ChangeEvent.

        Returns:
            Subscription handle that can cancel the registration.

        Raises:
            ValueError: If kind is unknown.
        """
        return self._observers.add(kind, callback)

    def off(self, kind: EventKind | str, callback: ObserverCallback) -> bool:
        """Unregister the first matching observer for a kind.

        Args:
            kind: Event kind or its string value.
            callback: Previously registered callable.

        Returns:
            True if an observer was removed.
        """
        return self._observers.remove(kind, callback)

    def on_created(self, callback: ObserverCallback) -> Subscription:
        """Register an observer for created files.

        Args:
            callback: Callable invoked with each ChangeEvent.

        Returns:
            Subscription handle that can cancel the registration.
        """
        return self.on(EventKind.CREATED, callback)

    def on_deleted(self, callback: ObserverCallback) -> Subscription:
        """Register an observer for deleted files.

        Args:
            callback: Callable invoked with each ChangeEvent.

        Returns:
            Subscription handle that can cancel the registration.
        """
        return self.on(EventKind.DELETED, callback)

    def on_modified(self, callback: ObserverCallback) -> Subscription:
        """Register an observer for modified files.

        Args:
            callback: Callable invoked with each ChangeEvent.

        Returns:
            Subscription handle that can cancel the registration.
        """
        return self.on(EventKind.MODIFIED, callback)

    def on_renamed(self, callback: ObserverCallback) -> Subscription:
        """Register an observer for renamed files.

        Args:
            callback: Callable invoked with each ChangeEvent.

        Returns:
            Subscription handle that can cancel the registration.
        """
        return self.on(EventKind.RENAMED, callback)

    def start_monitoring(self) -> None:
        """Enable event delivery.

        Idempotent - calling it while monitoring has no additional effect.

        Raises:
            ValueError: If the watched directory is missing or not a directory.
        """
        if self._source.enable():
            logger.info(
                "monitoring_started",
                directory=self.directory,
                name_filter=self.name_filter,
                observers=self._observers.count(),
            )

    def stop_monitoring(self) -> None:
        """Disable event delivery.

        Idempotent. A dispatch already in progress runs to completion.
        """
        if self._source.disable():
            logger.info("monitoring_stopped", directory=self.directory)

    def _on_raw_change(self, change: RawChange) -> None:
        """Normalize a raw notification and dispatch it.

        Args:
            change: Raw notification from the watch source.
        """
        if change.kind is EventKind.DELETED:
            size = 0
        else:
            size = best_effort_size(change.path)

        event = ChangeEvent(path=change.path, size_bytes=size, timestamp=self._clock())
        self._dispatch(change.kind, event)

    def _dispatch(self, kind: EventKind, event: ChangeEvent) -> None:
        """Invoke the observers of a kind in registration order.

        Args:
            kind: Kind whose observers receive the event.
            event: Normalized event to deliver.

        Raises:
            Exception: The first observer failure, when propagation is enabled.
        """
        observers = self._observers.snapshot(kind)

        for observer in observers:
            if self._propagate_observer_errors:
                observer(event)
                continue
            try:
                observer(event)
            except Exception:
                logger.exception(
                    "observer_error",
                    kind=kind.value,
                    path=event.path,
                    observer=repr(observer),
                )

        logger.debug(
            "event_dispatched",
            kind=kind.value,
            path=event.path,
            size_bytes=event.size_bytes,
            delivered_to=len(observers),
        )
