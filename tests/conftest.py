"""Shared fakes for the port interfaces."""

from datetime import datetime, timedelta, timezone

import pytest

from shower_tracker.domain.models import PermissionState
from shower_tracker.domain.notification import NotificationGateway
from shower_tracker.domain.store import StateStore
from shower_tracker.engine import ShowerEngine


class MemoryKV:
    """In-memory KeyValuePort."""

    def __init__(self, data=None):
        self.data = dict(data or {})
        self.fail_writes = False

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        if self.fail_writes:
            raise OSError("quota exceeded")
        self.data[key] = value


class FakeSurface:
    """NotificationSurfacePort that records what it was asked to show."""

    def __init__(self, permission=PermissionState.GRANTED, answer=PermissionState.GRANTED):
        self._permission = permission
        self._answer = answer
        self.requests = 0
        self.shown = []

    @property
    def permission(self):
        return self._permission

    async def request_permission(self):
        self.requests += 1
        self._permission = self._answer
        return self._answer

    async def show(self, title, body, icon=""):
        self.shown.append((title, body, icon))


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)
        return self.now


class RecordingRenderer:
    def __init__(self):
        self.views = []
        self.alerts = []

    def render(self, view):
        self.views.append(view)

    def alert(self, message):
        self.alerts.append(message)


@pytest.fixture
def kv():
    return MemoryKV()


@pytest.fixture
def surface():
    return FakeSurface()


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 1, 15, 7, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def engine(kv, surface, clock, renderer):
    return ShowerEngine(
        StateStore(kv),
        NotificationGateway(surface, icon="icon.png"),
        renderer=renderer,
        clock=clock,
    )


@pytest.fixture
def make_surface():
    return FakeSurface
