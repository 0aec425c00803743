"""Stderr notification adapter: for headless runs."""

import sys

from shower_tracker.domain.models import PermissionState


class LogNotificationAdapter:
    """Prints every notification to stderr. Always granted."""

    def __init__(self, stream=None):
        self._stream = stream or sys.stderr

    @property
    def permission(self) -> PermissionState:
        return PermissionState.GRANTED

    async def request_permission(self) -> PermissionState:
        return PermissionState.GRANTED

    async def show(self, title: str, body: str, icon: str = "") -> None:
        print(f"[notify] {title}: {body}", file=self._stream)
