"""Webhook notification adapter: posts reminders to a Discord-compatible webhook."""

import asyncio

import aiohttp

from shower_tracker.domain.models import NotificationDeliveryError, PermissionState


class WebhookNotificationAdapter:
    """NotificationSurfacePort over an incoming-webhook URL (Discord embed format)."""

    def __init__(self, url: str, max_retries: int = 3):
        self._url = url
        self._max_retries = max_retries

    @property
    def is_configured(self) -> bool:
        return bool(self._url)

    @property
    def permission(self) -> PermissionState:
        return PermissionState.GRANTED if self.is_configured else PermissionState.UNSUPPORTED

    async def request_permission(self) -> PermissionState:
        return self.permission

    @staticmethod
    def _payload(title: str, body: str, icon: str) -> dict:
        embed = {"title": title, "description": body}
        if icon:
            embed["thumbnail"] = {"url": icon}
        return {"embeds": [embed]}

    async def show(self, title: str, body: str, icon: str = "") -> None:
        if not self.is_configured:
            raise NotificationDeliveryError("SHOWER_WEBHOOK_URL not configured.")

        payload = self._payload(title, body, icon)
        for attempt in range(self._max_retries):
            try:
                async with aiohttp.ClientSession() as session:
                    async with session.post(self._url, json=payload) as resp:
                        if resp.status == 429:
                            if attempt < self._max_retries - 1:
                                await asyncio.sleep(min(2 ** attempt, 30))
                                continue
                            raise NotificationDeliveryError("Rate limited (429)")

                        if resp.status >= 400:
                            text = await resp.text()
                            raise NotificationDeliveryError(f"HTTP {resp.status}: {text}")
                        return

            except NotificationDeliveryError:
                raise
            except Exception as e:
                if attempt == self._max_retries - 1:
                    raise NotificationDeliveryError(str(e)) from e
                await asyncio.sleep(min(2 ** attempt, 30))

        raise NotificationDeliveryError("Max retries exceeded")
