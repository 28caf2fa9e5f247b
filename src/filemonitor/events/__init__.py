"""Events subsystem for directory watching and observer fan-out."""
from filemonitor.events.monitor import EventMonitor
from filemonitor.events.registry import ObserverRegistry, Subscription
from filemonitor.events.source import WatchSource
from filemonitor.events.types import ChangeEvent, EventKind, RawChange

__all__ = [
    "ChangeEvent",
    "EventKind",
    "EventMonitor",
    "ObserverRegistry",
    "RawChange",
    "Subscription",
    "WatchSource",
]
