"""Watch source backed by a watchdog observer."""

import fnmatch
import os
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

import structlog
from watchdog.events import (
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from filemonitor.events.types import EventKind, RawChange

logger = structlog.get_logger()

RawHandler = Callable[[RawChange], None]

MATCH_ALL_FILTERS: frozenset[str] = frozenset({"", "*", "*.*"})

RAW_EVENT_KINDS: dict[type[FileSystemEvent], EventKind] = {
    FileCreatedEvent: EventKind.CREATED,
    FileDeletedEvent: EventKind.DELETED,
    FileModifiedEvent: EventKind.MODIFIED,
    FileMovedEvent: EventKind.RENAMED,
}


def decode_path(path: str | bytes) -> str:
    """Return a watchdog path as text.

    Args:
        path: Path as reported by watchdog.

    Returns:
        Decoded path string.
    """
    if isinstance(path, str):
        return path
    return bytes(path).decode("utf-8", errors="replace")


def matches_filter(path: str, name_filter: str) -> bool:
    """Check a file name against a watch filter.

    "*.*", "*" and the empty filter accept every name, including names
    without an extension.

    Args:
        path: File path whose final component is tested.
        name_filter: Shell-style pattern.

    Returns:
        True if the file should be reported.
    """
    if name_filter in MATCH_ALL_FILTERS:
        return True
    return fnmatch.fnmatch(os.path.basename(path), name_filter)


def file_size(path: str) -> int:
    """Size of a file in bytes.

    Raises:
        OSError: If the file is missing or cannot be stat'ed.
    """
    return os.stat(path).st_size


class SourceEventHandler(FileSystemEventHandler):
    """Translates watchdog file events into RawChange notifications."""

    def __init__(self, source: "WatchSource") -> None:
        super().__init__()
        self._source = source

    def on_any_event(self, event: FileSystemEvent) -> None:
        """Filter and forward a raw watchdog event.

        Args:
            event: Raw watchdog filesystem event.
        """
        if event.is_directory:
            return

        kind = RAW_EVENT_KINDS.get(type(event))
        if kind is None:
            return

        src_path = decode_path(event.src_path)
        name_filter = self._source.name_filter

        if kind is EventKind.RENAMED:
            dest_path = decode_path(event.dest_path)
            if not (matches_filter(dest_path, name_filter) or matches_filter(src_path, name_filter)):
                return
            change = RawChange(kind=kind, path=dest_path, previous_path=src_path)
        else:
            if not matches_filter(src_path, name_filter):
                return
            change = RawChange(kind=kind, path=src_path)

        self._source.deliver(change)


class WatchSource:
    """Directory watch with an enable/disable switch and per-kind channels.

    A fresh watchdog observer is created each time delivery is enabled,
    since observer threads cannot be restarted. Delivery is checked against
    the switch under a lock, so no notification reaches a handler once
    disable() has returned.

    Attributes:
        directory: Absolute path of the watched directory.
        name_filter: Shell-style file name filter.
        recursive: Whether subdirectories are watched.
    """

    def __init__(
        self,
        directory: str | os.PathLike[str],
        name_filter: str = "*.*",
        *,
        recursive: bool = False,
        observer_factory: Callable[[], Any] = Observer,
        join_timeout: float = 5.0,
    ) -> None:
        """Initialize watch source.

        The directory is not checked here; problems surface from enable().

        Args:
            directory: Directory to watch.
            name_filter: Shell-style file name filter.
            recursive: Watch subdirectories as well.
            observer_factory: Callable returning a watchdog-compatible observer.
            join_timeout: Seconds to wait for the observer thread on disable.
        """
        self.directory = os.path.abspath(os.fspath(directory))
        self.name_filter = name_filter
        self.recursive = recursive
        self._observer_factory = observer_factory
        self._join_timeout = join_timeout
        self._handlers: dict[EventKind, list[RawHandler]] = {kind: [] for kind in EventKind}
        self._event_handler = SourceEventHandler(self)
        self._observer: Any | None = None
        self._enabled = False
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        """Whether notifications are currently delivered."""
        with self._lock:
            return self._enabled

    @property
    def event_handler(self) -> SourceEventHandler:
        """The watchdog handler scheduled on the observer."""
        return self._event_handler

    def subscribe(self, kind: EventKind, handler: RawHandler) -> None:
        """Register a raw handler for one notification kind.

        Args:
            kind: Notification kind.
            handler: Callable invoked with each RawChange of that kind.
        """
        with self._lock:
            self._handlers[EventKind(kind)].append(handler)

    def enable(self) -> bool:
        """Start delivering notifications.

        Returns:
            True if delivery was off and is now on.

        Raises:
            ValueError: If the directory does not exist or is not a directory.
        """
        with self._lock:
            if self._enabled:
                return False

            path = Path(self.directory)
            if not path.exists():
                raise ValueError(f"Watch path does not exist: {self.directory}")
            if not path.is_dir():
                raise ValueError(f"Watch path is not a directory: {self.directory}")

            observer = self._observer_factory()
            try:
                observer.schedule(self._event_handler, self.directory, recursive=self.recursive)
                observer.start()
            except Exception:
                observer.unschedule_all()
                observer.stop()
                raise
            self._observer = observer
            self._enabled = True

        logger.info(
            "watch_source_enabled",
            directory=self.directory,
            name_filter=self.name_filter,
            recursive=self.recursive,
        )
        return True

    def disable(self) -> bool:
        """Stop delivering notifications.

        Returns:
            True if delivery was on and is now off.
        """
        with self._lock:
            if not self._enabled:
                return False
            self._enabled = False
            observer, self._observer = self._observer, None

        if observer is not None:
            observer.stop()
            if observer is not threading.current_thread():
                observer.join(timeout=self._join_timeout)

        logger.info("watch_source_disabled", directory=self.directory)
        return True

    def deliver(self, change: RawChange) -> None:
        """Pass a raw change to the handlers for its kind while enabled.

        Args:
            change: Raw notification to deliver.
        """
        with self._lock:
            if not self._enabled:
                return
            handlers = tuple(self._handlers[change.kind])

        for handler in handlers:
            handler(change)
