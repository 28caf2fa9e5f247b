"""Directory change monitor with normalized, per-kind observer notifications."""
from filemonitor.events import ChangeEvent, EventKind, EventMonitor, Subscription

__all__ = ["ChangeEvent", "EventKind", "EventMonitor", "Subscription"]

__version__ = "0.1.0"
