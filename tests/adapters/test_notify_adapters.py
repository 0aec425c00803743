"""Tests for notification surface adapters."""

import io
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from shower_tracker.adapters.notify import (
    LogNotificationAdapter,
    WebhookNotificationAdapter,
    create_surface,
)
from shower_tracker.domain.models import NotificationDeliveryError, PermissionState
from shower_tracker.ports.outbound import NotificationSurfacePort


def _mock_session(status=204, text=""):
    resp = MagicMock()
    resp.status = status
    resp.text = AsyncMock(return_value=text)
    post_cm = MagicMock()
    post_cm.__aenter__ = AsyncMock(return_value=resp)
    post_cm.__aexit__ = AsyncMock(return_value=False)
    session = MagicMock()
    session.post = MagicMock(return_value=post_cm)
    session_cm = MagicMock()
    session_cm.__aenter__ = AsyncMock(return_value=session)
    session_cm.__aexit__ = AsyncMock(return_value=False)
    return session_cm, session


class TestCreateSurface:
    def test_log_default(self):
        assert isinstance(create_surface("log"), LogNotificationAdapter)
        assert isinstance(create_surface("anything-else"), LogNotificationAdapter)

    def test_webhook(self):
        surface = create_surface("webhook", "https://example.test/hook")
        assert isinstance(surface, WebhookNotificationAdapter)
        assert isinstance(surface, NotificationSurfacePort)


class TestLogAdapter:
    @pytest.mark.asyncio
    async def test_show(self):
        stream = io.StringIO()
        adapter = LogNotificationAdapter(stream=stream)
        assert adapter.permission is PermissionState.GRANTED
        assert await adapter.request_permission() is PermissionState.GRANTED
        await adapter.show("Shower Reminder", "Time to get fresh!")
        assert "Shower Reminder: Time to get fresh!" in stream.getvalue()


class TestWebhookAdapter:
    def test_unconfigured_is_unsupported(self):
        assert WebhookNotificationAdapter("").permission is PermissionState.UNSUPPORTED

    @pytest.mark.asyncio
    async def test_unconfigured_show_raises(self):
        with pytest.raises(NotificationDeliveryError):
            await WebhookNotificationAdapter("").show("t", "b")

    @pytest.mark.asyncio
    async def test_posts_embed(self):
        session_cm, session = _mock_session(status=204)
        adapter = WebhookNotificationAdapter("https://example.test/hook")
        with patch("shower_tracker.adapters.notify.webhook.aiohttp.ClientSession", return_value=session_cm):
            await adapter.show("Shower Alarm", "It's 07:00.", "https://icon")
        session.post.assert_called_once()
        args, kwargs = session.post.call_args
        assert args[0] == "https://example.test/hook"
        embed = kwargs["json"]["embeds"][0]
        assert embed == {
            "title": "Shower Alarm",
            "description": "It's 07:00.",
            "thumbnail": {"url": "https://icon"},
        }

    @pytest.mark.asyncio
    async def test_http_error_raises(self):
        session_cm, _ = _mock_session(status=500, text="boom")
        adapter = WebhookNotificationAdapter("https://example.test/hook")
        with patch("shower_tracker.adapters.notify.webhook.aiohttp.ClientSession", return_value=session_cm):
            with pytest.raises(NotificationDeliveryError, match="HTTP 500"):
                await adapter.show("t", "b")


class TestDesktopAdapter:
    @pytest.mark.asyncio
    async def test_show_calls_plyer(self):
        from shower_tracker.adapters.notify.desktop import DesktopNotificationAdapter

        with patch("shower_tracker.adapters.notify.desktop.notification") as mock:
            adapter = DesktopNotificationAdapter()
            await adapter.show("Shower Reminder", "body")
        mock.notify.assert_called_once()
        assert mock.notify.call_args.kwargs["title"] == "Shower Reminder"
        assert adapter.permission is PermissionState.GRANTED

    @pytest.mark.asyncio
    async def test_missing_backend_becomes_unsupported(self):
        from shower_tracker.adapters.notify.desktop import DesktopNotificationAdapter

        with patch("shower_tracker.adapters.notify.desktop.notification") as mock:
            mock.notify.side_effect = NotImplementedError("no backend")
            adapter = DesktopNotificationAdapter()
            with pytest.raises(NotificationDeliveryError):
                await adapter.show("t", "b")
        assert adapter.permission is PermissionState.UNSUPPORTED
