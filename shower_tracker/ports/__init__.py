"""Port interfaces (Hexagonal Architecture)."""

from shower_tracker.ports.outbound import KeyValuePort, NotificationSurfacePort, RenderPort

__all__ = [
    "KeyValuePort",
    "NotificationSurfacePort",
    "RenderPort",
]
