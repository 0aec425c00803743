"""Desktop notification adapter (plyer): implements NotificationSurfacePort."""

import asyncio
import sys

from plyer import notification

from shower_tracker.domain.models import NotificationDeliveryError, PermissionState

APP_NAME = "Shower Tracker"


def _log(msg: str):
    print(msg, file=sys.stderr)


class DesktopNotificationAdapter:
    """Native OS notifications. Becomes Unsupported once plyer reports no backend."""

    def __init__(self, app_name: str = APP_NAME, timeout: int = 10):
        self._app_name = app_name
        self._timeout = timeout
        self._permission = PermissionState.GRANTED

    @property
    def permission(self) -> PermissionState:
        return self._permission

    async def request_permission(self) -> PermissionState:
        # Desktop notifications need no prompt
        return self._permission

    async def show(self, title: str, body: str, icon: str = "") -> None:
        try:
            await asyncio.to_thread(
                notification.notify,
                title=title,
                message=body,
                app_name=self._app_name,
                timeout=self._timeout,
            )
        except NotImplementedError as e:
            self._permission = PermissionState.UNSUPPORTED
            _log(f"[DesktopNotification] no notification backend on this platform: {e}")
            raise NotificationDeliveryError("desktop notifications unsupported") from e
        except Exception as e:
            raise NotificationDeliveryError(str(e)) from e
