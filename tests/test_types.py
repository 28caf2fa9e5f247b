"""Change event model tests."""

import pytest
from pydantic import ValidationError

from conftest import FIXED_TIME
from filemonitor.events import ChangeEvent, EventKind


def test_change_event_is_immutable() -> None:
    """ChangeEvent fields cannot be reassigned."""
    event = ChangeEvent(path="/tmp/a.txt", size_bytes=3, timestamp=FIXED_TIME)
    with pytest.raises(ValidationError):
        event.size_bytes = 4  # type: ignore[misc]


def test_change_event_rejects_negative_size() -> None:
    """Negative sizes are rejected."""
    with pytest.raises(ValidationError):
        ChangeEvent(path="/tmp/a.txt", size_bytes=-1, timestamp=FIXED_TIME)


def test_change_event_rejects_empty_path() -> None:
    """An empty path is rejected."""
    with pytest.raises(ValidationError):
        ChangeEvent(path="", size_bytes=0, timestamp=FIXED_TIME)


def test_identical_events_compare_equal() -> None:
    """Events carry no identity beyond their fields."""
    first = ChangeEvent(path="/tmp/a.txt", size_bytes=1, timestamp=FIXED_TIME)
    second = ChangeEvent(path="/tmp/a.txt", size_bytes=1, timestamp=FIXED_TIME)
    assert first == second


def test_event_kind_accepts_string_values() -> None:
    """EventKind parses from its string value."""
    assert EventKind("renamed") is EventKind.RENAMED
    with pytest.raises(ValueError):
        EventKind("moved")
