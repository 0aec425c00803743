"""Domain data models: pure Python dataclasses."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

DEFAULT_INTERVAL_HOURS = 24


class InvalidAlarmInput(ValueError):
    """Raised when an alarm time is empty, malformed or already taken."""


class InvalidIntervalInput(ValueError):
    """Raised when the reminder interval is not a positive number of hours."""


class NotificationDeliveryError(Exception):
    """Raised by a notification surface when the alert could not be shown."""


class Status(str, Enum):
    FRESH = "fresh"
    WARNING = "warning"
    OVERDUE = "overdue"


class NotificationKind(str, Enum):
    INTERVAL = "interval"
    ALARM = "alarm"


class PermissionState(str, Enum):
    """Mirrors the browser Notification.permission values plus 'unsupported'."""

    DEFAULT = "default"
    GRANTED = "granted"
    DENIED = "denied"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class Alarm:
    """A daily wall-clock reminder. Never mutated; delete and re-add instead."""

    id: int
    time: str  # "HH:MM", 24h, zero-padded


@dataclass
class Record:
    """The persisted aggregate: one per process."""

    last_occurrence: Optional[datetime] = None
    history: List[str] = field(default_factory=list)  # newest first
    notifications_enabled: bool = False
    interval_hours: int = DEFAULT_INTERVAL_HOURS
    alarms: List[Alarm] = field(default_factory=list)  # sorted by time


@dataclass
class NotificationCooldown:
    """Per-channel debounce state, one field per notification kind."""

    last_interval_notify_at: Optional[datetime] = None
    last_alarm_minute_fired: Optional[str] = None


@dataclass
class TickResult:
    """Outcome of one timer tick. status is None when nothing was recorded yet."""

    status: Optional[Status]
    elapsed: str
    hours: Optional[int] = None


@dataclass
class NotificationRequest:
    kind: NotificationKind
    title: str
    body: str


@dataclass
class WidgetView:
    """Snapshot pushed to the rendering layer after every mutation and tick."""

    elapsed: str
    status: Optional[Status]
    status_text: str
    interval_hours: int
    notifications_enabled: bool
    history: List[str]
    alarms: List[Alarm]
