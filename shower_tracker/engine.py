"""Shower engine: single owner of state, reducer for user actions, tick driver."""

import asyncio
import sys
from dataclasses import replace
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from shower_tracker.domain import history, timer
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
from shower_tracker.domain.models import (
    InvalidAlarmInput,
    InvalidIntervalInput,
    PermissionState,
    Status,
    TickResult,
    WidgetView,
)
from shower_tracker.domain.notification import (
    PERMISSION_MESSAGES,
    NotificationGateway,
    interval_request,
)
from shower_tracker.domain.store import StateStore
from shower_tracker.ports.outbound import RenderPort


def _log(msg: str):
    print(msg, file=sys.stderr)


def local_now() -> datetime:
    """Local wall-clock time, timezone-aware."""
    return datetime.now().astimezone()


class _NullRenderer:
    def render(self, view: WidgetView) -> None:
        pass

    def alert(self, message: str) -> None:
        _log(f"[ShowerEngine] {message}")


class ShowerEngine:
    """Owns the Record and cooldown; every mutation is persisted and rendered."""

    def __init__(
        self,
        store: StateStore,
        gateway: NotificationGateway,
        renderer: Optional[RenderPort] = None,
        scheduler: Optional[AlarmScheduler] = None,
        clock: Callable[[], datetime] = local_now,
    ):
        self.store = store
        self.gateway = gateway
        self.renderer = renderer or _NullRenderer()
        self.scheduler = scheduler or AlarmScheduler()
        self._clock = clock
        self.record = store.load()
        self.cooldown = store.load_cooldown()
        self._last_tick: Optional[TickResult] = None

    # ── Actions ──────────────────────────────────────────────

    async def handle(self, action: Action) -> ActionResult:
        """Apply one user action, persist, and push a fresh view."""
        now = self._clock()
        try:
            if isinstance(action, MarkOccurrence):
                result = self._mark_occurrence(now)
            elif isinstance(action, SetInterval):
                result = self._set_interval(action.hours)
            elif isinstance(action, AddAlarm):
                alarm = self.scheduler.add_alarm(self.record, action.time, now)
                result = ActionResult(message=f"Alarm set for {alarm.time}")
            elif isinstance(action, DeleteAlarm):
                if self.scheduler.remove_alarm(self.record, action.alarm_id):
                    result = ActionResult()
                else:
                    result = ActionResult(ok=False, message=f"No alarm with id {action.alarm_id}")
            elif isinstance(action, ToggleNotifications):
                result = await self._toggle_notifications(action.enabled)
            elif isinstance(action, Reset):
                result = self._reset()
            else:
                raise TypeError(f"Unknown action: {action!r}")
        except (InvalidAlarmInput, InvalidIntervalInput) as e:
            self.renderer.alert(str(e))
            return ActionResult(ok=False, message=str(e))

        self.store.save(self.record)
        self._last_tick = timer.tick(now, self.record)
        self.renderer.render(self.view())
        return result

    def _mark_occurrence(self, now: datetime) -> ActionResult:
        # Millisecond precision, matching what the store can round-trip
        now = now.replace(microsecond=now.microsecond // 1000 * 1000)
        self.record.last_occurrence = now.astimezone(timezone.utc)
        entry = history.record(self.record, now)
        return ActionResult(message=entry)

    def _set_interval(self, hours: int) -> ActionResult:
        try:
            value = int(hours)
        except (TypeError, ValueError):
            raise InvalidIntervalInput(f"Invalid interval: {hours!r}")
        if value <= 0:
            raise InvalidIntervalInput(f"Interval must be a positive number of hours, got {value}")
        self.record.interval_hours = value
        return ActionResult()

    async def _toggle_notifications(self, enabled: bool) -> ActionResult:
        self.record.notifications_enabled = bool(enabled)
        if not enabled:
            return ActionResult()

        # Persist the intent before waiting on the permission prompt
        self.store.save(self.record)
        state = await self.gateway.request_permission()
        if state == PermissionState.GRANTED:
            return ActionResult()

        self.record.notifications_enabled = False
        message = PERMISSION_MESSAGES.get(state, PERMISSION_MESSAGES[PermissionState.DENIED])
        self.renderer.alert(message)
        return ActionResult(ok=False, message=message)

    def _reset(self) -> ActionResult:
        self.record.last_occurrence = None
        history.clear(self.record)
        self.record.alarms.clear()
        return ActionResult()

    # ── Tick ─────────────────────────────────────────────────

    async def tick(self, now: Optional[datetime] = None) -> TickResult:
        """Recompute status and run both reminder channels for this instant."""
        now = now or self._clock()
        result = timer.tick(now, self.record)
        before = replace(self.cooldown)

        if result.status == Status.OVERDUE and self.record.notifications_enabled:
            await self.gateway.dispatch(interval_request(), self.cooldown, now)

        alarm_request = self.scheduler.check(now, self.record, self.cooldown)
        if alarm_request is not None:
            await self.gateway.dispatch(alarm_request, self.cooldown, now)

        if self.cooldown != before:
            self.store.save_cooldown(self.cooldown)

        self._check_permission_revoked()
        self._last_tick = result
        self.renderer.render(self.view())
        return result

    def _check_permission_revoked(self) -> None:
        """Turn reminders off if the surface stopped accepting notifications."""
        state = self.gateway.permission
        if not self.record.notifications_enabled:
            return
        if state not in (PermissionState.DENIED, PermissionState.UNSUPPORTED):
            return
        self.record.notifications_enabled = False
        self.store.save(self.record)
        _log(f"[ShowerEngine] notifications disabled, permission is {state.value}")
        self.renderer.alert(PERMISSION_MESSAGES[state])

    def view(self) -> WidgetView:
        result = self._last_tick or timer.tick(self._clock(), self.record)
        return WidgetView(
            elapsed=result.elapsed,
            status=result.status,
            status_text=timer.status_text(result.status),
            interval_hours=self.record.interval_hours,
            notifications_enabled=self.record.notifications_enabled,
            history=list(self.record.history),
            alarms=list(self.record.alarms),
        )


class TickLoop:
    """Fixed-period, non-reentrant tick driver with a stop handle."""

    def __init__(
        self,
        func: Callable[[], Awaitable[object]],
        interval_seconds: float = 1.0,
        name: str = "shower-tick",
    ):
        self._func = func
        self._interval = float(interval_seconds)
        self._name = name
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _runner(self):
        while True:
            try:
                await self._func()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                _log(f"[TickLoop] tick failed: {e}")
            await asyncio.sleep(self._interval)

    def start(self) -> asyncio.Task:
        if self.running:
            return self._task
        self._task = asyncio.create_task(self._runner(), name=self._name)
        _log(f"[TickLoop] started ({self._interval}s)")
        return self._task

    async def stop(self):
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        _log("[TickLoop] stopped")
