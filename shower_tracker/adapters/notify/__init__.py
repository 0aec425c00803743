"""Notification surfaces."""

from shower_tracker.adapters.notify.log import LogNotificationAdapter
from shower_tracker.adapters.notify.webhook import WebhookNotificationAdapter


def create_surface(backend: str, webhook_url: str = ""):
    """Return the NotificationSurfacePort for a backend name."""
    if backend == "webhook":
        return WebhookNotificationAdapter(webhook_url)
    if backend == "desktop":
        # plyer is only imported when asked for
        from shower_tracker.adapters.notify.desktop import DesktopNotificationAdapter

        return DesktopNotificationAdapter()
    return LogNotificationAdapter()


__all__ = [
    "LogNotificationAdapter",
    "WebhookNotificationAdapter",
    "create_surface",
]
