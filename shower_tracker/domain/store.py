"""State persistence: load, save and migrate the Record through a key-value port.

Pure domain logic, no framework dependencies. Every failure degrades to a safe
default: a corrupt blob loads as the default Record, and a failed write leaves
the in-memory state as the source of truth.
"""

import json
import sys
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from shower_tracker.domain.alarm import normalize_time
from shower_tracker.domain.history import HISTORY_LIMIT
from shower_tracker.domain.models import (
    DEFAULT_INTERVAL_HOURS,
    Alarm,
    InvalidAlarmInput,
    NotificationCooldown,
    Record,
)
from shower_tracker.ports.outbound import KeyValuePort

STATE_KEY = "showerData"
LAST_NOTIFIED_KEY = "lastNotified"
LAST_ALARM_MINUTE_KEY = "lastAlarmMinute"

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _log(msg: str):
    print(msg, file=sys.stderr)


def format_timestamp(dt: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. 2025-01-15T09:01:00.000Z."""
    utc = dt.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def parse_timestamp(raw: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if not isinstance(raw, str) or not raw:
        return None
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def to_epoch_millis(dt: datetime) -> int:
    return (dt - EPOCH) // timedelta(milliseconds=1)


def from_epoch_millis(ms: int) -> datetime:
    return EPOCH + timedelta(milliseconds=ms)


def record_to_dict(record: Record) -> Dict[str, Any]:
    """Serialize in the persisted key order."""
    return {
        "lastShower": (
            format_timestamp(record.last_occurrence)
            if record.last_occurrence
            else None
        ),
        "history": list(record.history),
        "notificationsEnabled": record.notifications_enabled,
        "interval": record.interval_hours,
        "alarms": [{"time": a.time, "id": a.id} for a in record.alarms],
    }


def _parse_interval(raw: Any) -> int:
    # Older blobs may carry the interval as a string (select value)
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_INTERVAL_HOURS
    return value if value > 0 else DEFAULT_INTERVAL_HOURS


def _parse_alarms(raw: Any) -> List[Alarm]:
    if not isinstance(raw, list):
        return []
    alarms: Dict[str, Alarm] = {}
    for item in raw:
        if not isinstance(item, dict) or "time" not in item:
            continue
        try:
            time_str = normalize_time(str(item["time"]))
            alarm_id = int(item.get("id", 0))
        except (InvalidAlarmInput, TypeError, ValueError):
            continue
        # First occurrence wins if a hand-edited blob duplicates a time
        alarms.setdefault(time_str, Alarm(id=alarm_id, time=time_str))
    return sorted(alarms.values(), key=lambda a: a.time)


def record_from_dict(raw: Dict[str, Any]) -> Record:
    """Build a Record from a decoded blob, defaulting every missing or bad field.

    Blobs written before alarms existed have no "alarms" key and load with an
    empty alarm list.
    """
    history = raw.get("history")
    if not isinstance(history, list):
        history = []
    return Record(
        last_occurrence=parse_timestamp(raw.get("lastShower")),
        history=[str(h) for h in history][:HISTORY_LIMIT],
        notifications_enabled=bool(raw.get("notificationsEnabled", False)),
        interval_hours=_parse_interval(raw.get("interval", DEFAULT_INTERVAL_HOURS)),
        alarms=_parse_alarms(raw.get("alarms", [])),
    )


class StateStore:
    """Owns the persisted Record and the notification cooldown keys."""

    def __init__(self, kv: KeyValuePort, key: str = STATE_KEY):
        self._kv = kv
        self._key = key

    def load(self) -> Record:
        """Return the stored Record, or a default one if absent or corrupt."""
        try:
            blob = self._kv.get(self._key)
        except Exception as e:
            _log(f"[StateStore] read failed: {e}")
            return Record()
        if blob is None:
            return Record()
        try:
            raw = json.loads(blob)
        except (TypeError, ValueError) as e:
            _log(f"[StateStore] corrupt state, using defaults: {e}")
            return Record()
        if not isinstance(raw, dict):
            _log(f"[StateStore] unexpected state shape {type(raw).__name__}, using defaults")
            return Record()
        return record_from_dict(raw)

    @staticmethod
    def dumps(record: Record) -> str:
        return json.dumps(record_to_dict(record), ensure_ascii=False, separators=(",", ":"))

    def save(self, record: Record) -> bool:
        """Persist synchronously. Returns False if the write failed."""
        try:
            self._kv.set(self._key, self.dumps(record))
            return True
        except Exception as e:
            _log(f"[StateStore] save failed: {e}")
            return False

    def load_cooldown(self) -> NotificationCooldown:
        cooldown = NotificationCooldown()
        try:
            last_notified = self._kv.get(LAST_NOTIFIED_KEY)
            last_minute = self._kv.get(LAST_ALARM_MINUTE_KEY)
        except Exception as e:
            _log(f"[StateStore] cooldown read failed: {e}")
            return cooldown
        if last_notified:
            try:
                cooldown.last_interval_notify_at = from_epoch_millis(int(last_notified))
            except (TypeError, ValueError, OverflowError):
                _log(f"[StateStore] ignoring bad {LAST_NOTIFIED_KEY}={last_notified!r}")
        if last_minute:
            try:
                cooldown.last_alarm_minute_fired = normalize_time(last_minute)
            except InvalidAlarmInput:
                _log(f"[StateStore] ignoring bad {LAST_ALARM_MINUTE_KEY}={last_minute!r}")
        return cooldown

    def save_cooldown(self, cooldown: NotificationCooldown) -> bool:
        try:
            if cooldown.last_interval_notify_at is not None:
                self._kv.set(
                    LAST_NOTIFIED_KEY,
                    str(to_epoch_millis(cooldown.last_interval_notify_at)),
                )
            self._kv.set(LAST_ALARM_MINUTE_KEY, cooldown.last_alarm_minute_fired or "")
            return True
        except Exception as e:
            _log(f"[StateStore] cooldown save failed: {e}")
            return False
