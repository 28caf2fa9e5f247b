"""Shutdown coordinator for the monitor process."""
import threading

import structlog

logger = structlog.get_logger()


class ShutdownSignal:
    """Coordinates shutdown between signal handlers and the main thread.

    Attributes:
        is_triggered: Whether shutdown has been triggered.
    """

    def __init__(self) -> None:
        """Initialize shutdown coordinator."""
        self._event = threading.Event()

    @property
    def is_triggered(self) -> bool:
        """Check if shutdown has been triggered.

        Returns:
            True if shutdown signal received.
        """
        return self._event.is_set()

    def trigger(self) -> None:
        """Signal the waiting thread to begin shutdown.

        Idempotent - calling multiple times has no additional effect.
        """
        if self._event.is_set():
            return
        logger.info("shutdown_triggered")
        self._event.set()

    def wait_for_trigger(self, poll_interval: float = 1.0) -> None:
        """Block until trigger() is called from a signal handler or thread.

        Waits in short slices so the main thread keeps running Python
        signal handlers.

        Args:
            poll_interval: Seconds per wait slice.
        """
        while not self._event.wait(timeout=poll_interval):
            pass
