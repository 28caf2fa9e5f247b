"""Entry point for the directory monitor."""

import functools
import signal
import sys
from collections.abc import Callable

import structlog
from pydantic import ValidationError

from filemonitor.config import Settings
from filemonitor.events import ChangeEvent, EventKind, EventMonitor, WatchSource
from filemonitor.lifecycle import ShutdownSignal
from filemonitor.logging import configure_logging

logger = structlog.get_logger()


def log_observer(kind: EventKind) -> Callable[[ChangeEvent], None]:
    """Build an observer that logs each event of one kind.

    Args:
        kind: Event kind the observer is registered for.

    Returns:
        Callable suitable for EventMonitor.on().
    """
    event_name = f"file_{kind.value}"

    def observe(event: ChangeEvent) -> None:
        if kind is EventKind.DELETED:
            logger.info(event_name, path=event.path, timestamp=event.timestamp.isoformat())
        else:
            logger.info(
                event_name,
                path=event.path,
                size_bytes=event.size_bytes,
                timestamp=event.timestamp.isoformat(),
            )

    return observe


def build_monitor(settings: Settings) -> EventMonitor:
    """Create a monitor with one logging observer per event kind.

    Args:
        settings: Monitor configuration.

    Returns:
        Configured, not yet started monitor.
    """
    monitor = EventMonitor(
        settings.directory_path,
        settings.name_filter,
        recursive=settings.recursive,
        propagate_observer_errors=settings.propagate_observer_errors,
        source_factory=functools.partial(WatchSource, join_timeout=settings.shutdown_timeout),
    )
    for kind in EventKind:
        monitor.on(kind, log_observer(kind))
    return monitor


def run(settings: Settings, shutdown: ShutdownSignal) -> int:
    """Monitor until shutdown is triggered.

    Args:
        settings: Monitor configuration.
        shutdown: Shutdown coordinator instance.

    Returns:
        Process exit status.
    """
    monitor = build_monitor(settings)
    try:
        monitor.start_monitoring()
    except (OSError, ValueError) as e:
        logger.error("monitor_start_failed", error=str(e), directory=settings.directory_path)
        return 2

    logger.info(
        "monitor_online",
        directory=monitor.directory,
        name_filter=monitor.name_filter,
    )
    try:
        shutdown.wait_for_trigger()
    finally:
        monitor.stop_monitoring()
    return 0


def main() -> None:
    """Entry point for python -m filemonitor."""
    try:
        settings = Settings()
    except ValidationError as e:
        configure_logging()
        logger.error("invalid_settings", error=str(e))
        sys.exit(2)
    configure_logging(debug=settings.debug, json_logs=settings.json_logs)

    shutdown = ShutdownSignal()
    for sig in (signal.SIGTERM, signal.SIGINT):
        signal.signal(sig, lambda signum, frame: shutdown.trigger())

    sys.exit(run(settings, shutdown))


if __name__ == "__main__":
    main()
