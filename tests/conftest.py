"""Pytest configuration and fixtures."""

import functools
import sys
import threading
from datetime import UTC, datetime
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from filemonitor.events import ChangeEvent, EventKind, EventMonitor, WatchSource

FIXED_TIME = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)


class FakeObserver:
    """Stand-in for a watchdog observer that never touches the filesystem."""

    instances: list["FakeObserver"] = []

    def __init__(self) -> None:
        self.scheduled: list[tuple[object, str, bool]] = []
        self.started = False
        self.stopped = False
        self.joined = False
        self.unscheduled = False
        FakeObserver.instances.append(self)

    def schedule(self, handler: object, path: str, recursive: bool = False) -> None:
        self.scheduled.append((handler, path, recursive))

    def start(self) -> None:
        self.started = True

    def unschedule_all(self) -> None:
        self.unscheduled = True

    def stop(self) -> None:
        self.stopped = True

    def join(self, timeout: float | None = None) -> None:
        self.joined = True


class Recorder:
    """Collects (kind, event) pairs from observers."""

    def __init__(self) -> None:
        self.records: list[tuple[EventKind, ChangeEvent]] = []
        self._lock = threading.Lock()

    def observer(self, kind: EventKind):
        def record(event: ChangeEvent) -> None:
            with self._lock:
                self.records.append((kind, event))

        return record

    def tuples(self) -> list[tuple[str, str, int]]:
        with self._lock:
            return [(kind.value, event.path, event.size_bytes) for kind, event in self.records]


@pytest.fixture(autouse=True)
def reset_fake_observers():
    """Clear the fake observer instance list between tests."""
    FakeObserver.instances.clear()
    yield
    FakeObserver.instances.clear()


@pytest.fixture
def fake_source_factory():
    """WatchSource factory wired to FakeObserver."""
    return functools.partial(WatchSource, observer_factory=FakeObserver)


@pytest.fixture
def monitor(tmp_path: Path, fake_source_factory) -> EventMonitor:
    """Monitor on tmp_path with a fake observer and a fixed clock."""
    return EventMonitor(
        tmp_path,
        source_factory=fake_source_factory,
        clock=lambda: FIXED_TIME,
    )


@pytest.fixture
def recorder() -> Recorder:
    """Fresh event recorder."""
    return Recorder()
