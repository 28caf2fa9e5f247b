"""Domain types for normalized file change events."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EventKind(str, Enum):
    """Kinds of file-level changes reported by the monitor."""

    CREATED = "created"
    DELETED = "deleted"
    MODIFIED = "modified"
    RENAMED = "renamed"


class ChangeEvent(BaseModel):
    """Normalized file change delivered to observers.

    Attributes:
        path: Absolute path of the affected file.
        size_bytes: Best-effort file size at dispatch time, 0 for deletions.
        timestamp: Time the monitor normalized the event (UTC).
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(min_length=1, description="Absolute file path")
    size_bytes: int = Field(ge=0, description="File size in bytes")
    timestamp: datetime = Field(description="Dispatch timestamp (UTC)")


@dataclass(frozen=True, slots=True)
class RawChange:
    """Raw notification emitted by the watch source."""

    kind: EventKind
    path: str
    previous_path: str | None = None
