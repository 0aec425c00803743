"""Domain layer: pure Python, no framework dependencies."""

from shower_tracker.domain.models import (
    Alarm,
    InvalidAlarmInput,
    InvalidIntervalInput,
    NotificationCooldown,
    NotificationDeliveryError,
    NotificationKind,
    NotificationRequest,
    PermissionState,
    Record,
    Status,
    TickResult,
    WidgetView,
)
from shower_tracker.domain.actions import (
    Action,
    ActionResult,
    AddAlarm,
    DeleteAlarm,
    MarkOccurrence,
    Reset,
    SetInterval,
    ToggleNotifications,
)
from shower_tracker.domain.alarm import AlarmScheduler
from shower_tracker.domain.notification import NotificationGateway
from shower_tracker.domain.store import StateStore

__all__ = [
    "Action",
    "ActionResult",
    "AddAlarm",
    "Alarm",
    "AlarmScheduler",
    "DeleteAlarm",
    "InvalidAlarmInput",
    "InvalidIntervalInput",
    "MarkOccurrence",
    "NotificationCooldown",
    "NotificationDeliveryError",
    "NotificationGateway",
    "NotificationKind",
    "NotificationRequest",
    "PermissionState",
    "Record",
    "Reset",
    "SetInterval",
    "StateStore",
    "Status",
    "TickResult",
    "ToggleNotifications",
    "WidgetView",
]
