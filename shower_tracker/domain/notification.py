"""Notification gateway: permission mediation and per-channel cooldowns.

Interval and alarm reminders share one delivery surface but each channel has
its own cooldown field and policy, so one never suppresses the other.
"""

import sys
from datetime import datetime, timedelta

from shower_tracker.domain.models import (
    NotificationCooldown,
    NotificationDeliveryError,
    NotificationKind,
    NotificationRequest,
    PermissionState,
)
from shower_tracker.ports.outbound import NotificationSurfacePort

INTERVAL_COOLDOWN = timedelta(hours=1)

INTERVAL_TITLE = "Shower Reminder"
INTERVAL_BODY = "It's been a while since your last shower. Time to get fresh!"
DEFAULT_ICON = "https://cdn-icons-png.flaticon.com/512/3100/3100824.png"

PERMISSION_MESSAGES = {
    PermissionState.UNSUPPORTED: "This device does not support desktop notifications.",
    PermissionState.DENIED: "Notification permission was denied. Reminders are turned off.",
    PermissionState.DEFAULT: "Notification permission was not granted. Reminders are turned off.",
}


def _log(msg: str):
    print(msg, file=sys.stderr)


def interval_request() -> NotificationRequest:
    return NotificationRequest(
        kind=NotificationKind.INTERVAL,
        title=INTERVAL_TITLE,
        body=INTERVAL_BODY,
    )


def interval_allowed(cooldown: NotificationCooldown, now: datetime) -> bool:
    last = cooldown.last_interval_notify_at
    return last is None or now - last >= INTERVAL_COOLDOWN


class NotificationGateway:
    """Gates and dispatches reminders onto a NotificationSurfacePort."""

    def __init__(self, surface: NotificationSurfacePort, icon: str = DEFAULT_ICON):
        self._surface = surface
        self._icon = icon

    @property
    def permission(self) -> PermissionState:
        return self._surface.permission

    async def request_permission(self) -> PermissionState:
        """Ask the surface for permission unless it is already settled."""
        current = self._surface.permission
        if current in (PermissionState.GRANTED, PermissionState.UNSUPPORTED):
            return current
        try:
            state = await self._surface.request_permission()
        except Exception as e:
            _log(f"[NotificationGateway] permission request failed: {e}")
            return PermissionState.DENIED
        _log(f"[NotificationGateway] permission: {state.value}")
        return state

    async def dispatch(
        self,
        request: NotificationRequest,
        cooldown: NotificationCooldown,
        now: datetime,
    ) -> bool:
        """Deliver `request` if its channel policy allows. Returns True if shown.

        Interval reminders are held back for an hour after the previous attempt.
        Alarm reminders were already de-duplicated by the scheduler and go out
        as-is.
        """
        if self._surface.permission != PermissionState.GRANTED:
            return False

        if request.kind == NotificationKind.INTERVAL:
            if not interval_allowed(cooldown, now):
                return False
            # Stamped on attempt, delivered or not
            cooldown.last_interval_notify_at = now

        try:
            await self._surface.show(request.title, request.body, self._icon)
        except NotificationDeliveryError as e:
            _log(f"[NotificationGateway] {request.kind.value} delivery failed: {e}")
            return False
        _log(f"[NotificationGateway] sent {request.kind.value}: {request.title}")
        return True
