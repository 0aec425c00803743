"""Shower Tracker: elapsed-time habit widget with interval and alarm reminders."""

from shower_tracker.config import CONFIG, AppConfig, __version__
from shower_tracker.domain.store import StateStore
from shower_tracker.domain.notification import NotificationGateway
from shower_tracker.domain.alarm import AlarmScheduler
from shower_tracker.engine import ShowerEngine, TickLoop

__all__ = [
    "CONFIG",
    "AppConfig",
    "__version__",
    "StateStore",
    "NotificationGateway",
    "AlarmScheduler",
    "ShowerEngine",
    "TickLoop",
]
