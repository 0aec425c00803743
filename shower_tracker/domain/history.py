"""Bounded occurrence history, newest first."""

from datetime import datetime

from shower_tracker.domain.models import Record

HISTORY_LIMIT = 10


def format_entry(when: datetime) -> str:
    """en-US locale style, e.g. '1/15/2025, 9:01:00 AM'."""
    hour12 = when.hour % 12 or 12
    suffix = "AM" if when.hour < 12 else "PM"
    return (
        f"{when.month}/{when.day}/{when.year}, "
        f"{hour12}:{when.minute:02d}:{when.second:02d} {suffix}"
    )


def record(state: Record, when: datetime) -> str:
    """Prepend an entry for `when` and evict anything past HISTORY_LIMIT."""
    entry = format_entry(when)
    state.history.insert(0, entry)
    del state.history[HISTORY_LIMIT:]
    return entry


def clear(state: Record):
    state.history.clear()
