"""Outbound ports: interfaces for external system adapters."""

from typing import Optional, Protocol, runtime_checkable

from shower_tracker.domain.models import PermissionState, WidgetView


@runtime_checkable
class KeyValuePort(Protocol):
    """Interface for the persistent key-value store."""

    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...


@runtime_checkable
class NotificationSurfacePort(Protocol):
    """Interface for the local notification surface."""

    @property
    def permission(self) -> PermissionState: ...

    async def request_permission(self) -> PermissionState: ...

    async def show(self, title: str, body: str, icon: str = "") -> None: ...


@runtime_checkable
class RenderPort(Protocol):
    """Interface for the presentation layer (push model)."""

    def render(self, view: WidgetView) -> None: ...
    def alert(self, message: str) -> None: ...
