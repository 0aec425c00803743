"""Alarm scheduler: daily alarm registration and minute-boundary matching.

Pure domain logic, no framework dependencies.
"""

import re
from datetime import datetime, timezone
from typing import Optional

from shower_tracker.domain.models import (
    Alarm,
    InvalidAlarmInput,
    NotificationCooldown,
    NotificationKind,
    NotificationRequest,
    Record,
)

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

# An alarm stays quiet if the last occurrence is this recent
ALARM_GUARD_HOURS = 12

ALARM_TITLE = "Shower Alarm"
ALARM_BODY = "It's {minute}. Time for your scheduled shower!"

# Stand-in for "never recorded": far enough back that the guard always passes
_NEVER = datetime(1970, 1, 1, tzinfo=timezone.utc)


def normalize_time(time_str: str) -> str:
    """Validate an H:MM / HH:MM string and return it zero-padded."""
    s = (time_str or "").strip()
    if not s:
        raise InvalidAlarmInput("Please select a time for the alarm.")
    m = _TIME_RE.match(s)
    if not m:
        raise InvalidAlarmInput(f"Invalid alarm time: {s!r}. Use HH:MM.")
    hour, minute = int(m.group(1)), int(m.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise InvalidAlarmInput(f"Invalid alarm time: {s!r}. Use HH:MM.")
    return f"{hour:02d}:{minute:02d}"


def current_minute(now: datetime) -> str:
    return now.strftime("%H:%M")


class AlarmScheduler:
    """Adds and removes alarms on a Record and decides when one fires."""

    def __init__(self, guard_hours: float = ALARM_GUARD_HOURS):
        self._guard_hours = guard_hours

    @staticmethod
    def _next_id(record: Record, now: datetime) -> int:
        """Epoch millis, bumped past existing ids so two quick adds never collide."""
        candidate = int(now.timestamp() * 1000)
        if record.alarms:
            candidate = max(candidate, max(a.id for a in record.alarms) + 1)
        return candidate

    def add_alarm(self, record: Record, time_str: str, now: datetime) -> Alarm:
        """Validate, insert in time order and return the new alarm."""
        time_norm = normalize_time(time_str)
        if any(a.time == time_norm for a in record.alarms):
            raise InvalidAlarmInput(f"An alarm for {time_norm} already exists.")

        alarm = Alarm(id=self._next_id(record, now), time=time_norm)
        record.alarms.append(alarm)
        record.alarms.sort(key=lambda a: a.time)
        return alarm

    @staticmethod
    def remove_alarm(record: Record, alarm_id: int) -> bool:
        """Remove alarm by ID. Returns True if found and removed."""
        before = len(record.alarms)
        record.alarms[:] = [a for a in record.alarms if a.id != alarm_id]
        return len(record.alarms) != before

    def check(
        self,
        now: datetime,
        record: Record,
        cooldown: NotificationCooldown,
    ) -> Optional[NotificationRequest]:
        """Return an alarm notification for this minute, at most once per minute.

        The per-minute debounce is global: two alarms can never share a minute,
        and repeated ticks inside the same minute collapse to one request.
        """
        minute = current_minute(now)
        if cooldown.last_alarm_minute_fired not in (None, minute):
            # Debounce only holds within its own minute
            cooldown.last_alarm_minute_fired = None

        if not record.notifications_enabled or not record.alarms:
            return None
        if cooldown.last_alarm_minute_fired == minute:
            return None

        alarm = next((a for a in record.alarms if a.time == minute), None)
        if alarm is None:
            return None

        last = record.last_occurrence or _NEVER
        hours_since = (now - last).total_seconds() / 3600
        if hours_since <= self._guard_hours:
            return None

        cooldown.last_alarm_minute_fired = minute
        return NotificationRequest(
            kind=NotificationKind.ALARM,
            title=ALARM_TITLE,
            body=ALARM_BODY.format(minute=minute),
        )
