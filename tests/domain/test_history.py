"""Tests for the bounded occurrence history."""

from datetime import datetime, timedelta

from shower_tracker.domain import history
from shower_tracker.domain.history import HISTORY_LIMIT, format_entry
from shower_tracker.domain.models import Record


class TestFormatEntry:
    def test_morning(self):
        assert format_entry(datetime(2025, 1, 5, 9, 3, 7)) == "1/5/2025, 9:03:07 AM"

    def test_afternoon(self):
        assert format_entry(datetime(2025, 12, 25, 18, 30, 0)) == "12/25/2025, 6:30:00 PM"

    def test_midnight_and_noon(self):
        assert format_entry(datetime(2025, 3, 1, 0, 0, 0)) == "3/1/2025, 12:00:00 AM"
        assert format_entry(datetime(2025, 3, 1, 12, 0, 0)) == "3/1/2025, 12:00:00 PM"


class TestHistoryLog:
    def test_newest_first(self):
        record = Record()
        t = datetime(2025, 1, 1, 8, 0, 0)
        history.record(record, t)
        history.record(record, t + timedelta(days=1))
        assert record.history[0] == format_entry(t + timedelta(days=1))
        assert record.history[1] == format_entry(t)

    def test_capacity(self):
        record = Record()
        start = datetime(2025, 1, 1, 8, 0, 0)
        entries = [history.record(record, start + timedelta(days=i)) for i in range(11)]
        assert len(record.history) == HISTORY_LIMIT == 10
        assert entries[0] not in record.history
        assert record.history[0] == entries[10]

    def test_never_exceeds_limit(self):
        record = Record()
        start = datetime(2025, 1, 1, 8, 0, 0)
        for i in range(25):
            history.record(record, start + timedelta(hours=i))
            assert len(record.history) <= HISTORY_LIMIT

    def test_clear(self):
        record = Record()
        history.record(record, datetime(2025, 1, 1, 8, 0, 0))
        history.clear(record)
        assert record.history == []
