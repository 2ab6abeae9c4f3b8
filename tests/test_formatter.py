"""Tests for schedule formatting."""

import pytest
from datetime import datetime, timezone
from cronview.calendar import to_instant_ms
from cronview.formatter import ScheduleFormatter
from cronview.models import AtSchedule, CronSchedule, EverySchedule


class TestDescribe:
    """Tests for ScheduleFormatter.describe."""

    @pytest.mark.parametrize(
        "interval_ms, label",
        [
            (30_000, "Every 30s"),
            (1_500, "Every 1.5s"),
            (15 * 60_000, "Every 15 min"),
            (6 * 3_600_000, "Every 6h"),
            (2 * 86_400_000, "Every 2d"),
            (0, "Interval unknown"),
        ],
    )
    def test_intervals(self, interval_ms, label):
        """Test interval labels."""
        assert ScheduleFormatter.describe(EverySchedule(interval_ms)) == label

    def test_one_time(self):
        """Test one-time labels are shown in UTC."""
        instant = to_instant_ms(datetime(2026, 2, 10, 9, 30, tzinfo=timezone.utc))
        assert ScheduleFormatter.describe(AtSchedule(instant)) == "2026-02-10 09:30 UTC"

    @pytest.mark.parametrize(
        "expression, label",
        [
            ("*/5 * * * *", "Every 5 min"),
            ("13,43 * * * *", "2× per hour"),
            ("7 * * * *", "Hourly at :07"),
            ("0 9 * * *", "Daily 9:00 AM"),
            ("30 0 * * *", "Daily 12:30 AM"),
            ("5 17 * * *", "Daily 5:05 PM"),
            ("0 12 * * 1", "Weekly on Mon 12:00 PM"),
            ("0 8 * * 7", "Weekly on Sun 8:00 AM"),
            ("0 9 1 * 1", "0 9 1 * 1"),
            ("0 9-17 * * 1-5", "0 9-17 * * 1-5"),
            ("bad", "bad"),
        ],
    )
    def test_cron(self, expression, label):
        """Test cron labels for common shapes."""
        assert ScheduleFormatter.describe(CronSchedule(expression)) == label


class TestFormatCount:
    """Tests for ScheduleFormatter.format_count."""

    def test_counts(self):
        """Test cell labels."""
        assert ScheduleFormatter.format_count(0) == ""
        assert ScheduleFormatter.format_count(1) == "1 run"
        assert ScheduleFormatter.format_count(48) == "48 runs"
