"""Elapsed-time computation and urgency classification."""

from datetime import datetime
from typing import Optional

from shower_tracker.domain.models import Record, Status, TickResult

WARNING_RATIO = 0.75
PLACEHOLDER = "--:--:--"

STATUS_TEXT = {
    Status.FRESH: "You're all fresh!",
    Status.WARNING: "Getting close to shower time...",
    Status.OVERDUE: "Time for a shower!",
}
IDLE_TEXT = "Checking status..."


def format_elapsed(total_seconds: int) -> str:
    """HH:MM:SS with uncapped hours; negative input saturates at zero."""
    total_seconds = max(0, int(total_seconds))
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def classify(hours: int, interval_hours: int) -> Status:
    """Fresh below 75% of the interval, Warning up to it, Overdue from it on."""
    if hours < interval_hours * WARNING_RATIO:
        return Status.FRESH
    if hours < interval_hours:
        return Status.WARNING
    return Status.OVERDUE


def status_text(status: Optional[Status]) -> str:
    return STATUS_TEXT.get(status, IDLE_TEXT)


def tick(now: datetime, record: Record) -> TickResult:
    if record.last_occurrence is None:
        return TickResult(status=None, elapsed=PLACEHOLDER)

    elapsed = max(0, int((now - record.last_occurrence).total_seconds()))
    hours = elapsed // 3600
    return TickResult(
        status=classify(hours, record.interval_hours),
        elapsed=format_elapsed(elapsed),
        hours=hours,
    )
