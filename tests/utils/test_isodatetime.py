"""Tests for isodatetime module."""

from datetime import datetime, timedelta, timezone, UTC

from todo_core.utils import isodatetime


class TestToTimestamp:
    """Tests for to_timestamp function."""

    def test_converts_naive_datetime_to_utc(self):
        """Naive datetime should be treated as UTC."""
        dt = datetime(2025, 12, 23, 10, 30, 0)
        assert isodatetime.to_timestamp(dt) == "2025-12-23T10:30:00.000000Z"

    def test_converts_aware_datetime_to_utc(self):
        """Aware datetime in another zone should be shifted to UTC."""
        dt = datetime(2025, 12, 23, 18, 30, 0, tzinfo=timezone(timedelta(hours=8)))
        assert isodatetime.to_timestamp(dt) == "2025-12-23T10:30:00.000000Z"

    def test_always_includes_microseconds(self):
        """Fixed precision keeps stored timestamps string-comparable."""
        whole = isodatetime.to_timestamp(datetime(2025, 12, 23, 10, 30, 0, tzinfo=UTC))
        fraction = isodatetime.to_timestamp(datetime(2025, 12, 23, 10, 30, 0, 1, tzinfo=UTC))
        assert whole == "2025-12-23T10:30:00.000000Z"
        assert fraction == "2025-12-23T10:30:00.000001Z"
        assert whole < fraction


class TestToDatetime:
    """Tests for to_datetime function."""

    def test_converts_z_suffix(self):
        result = isodatetime.to_datetime("2025-12-23T10:30:00Z")
        assert result == datetime(2025, 12, 23, 10, 30, 0, tzinfo=UTC)

    def test_converts_with_microseconds(self):
        result = isodatetime.to_datetime("2025-12-23T10:30:00.123456Z")
        assert result == datetime(2025, 12, 23, 10, 30, 0, 123456, tzinfo=UTC)


class TestNow:
    """Tests for now and utcnow."""

    def test_utcnow_is_aware(self):
        assert isodatetime.utcnow().tzinfo is not None

    def test_now_returns_recent_timestamp(self):
        """Should return a parseable timestamp between two clock reads."""
        before = datetime.now(UTC)
        result = isodatetime.now()
        after = datetime.now(UTC)

        assert result.endswith("Z")
        assert before <= isodatetime.to_datetime(result) <= after
