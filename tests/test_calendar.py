"""Tests for UTC calendar range arithmetic."""

import pytest
from datetime import datetime, timedelta, timezone
from cronview.calendar import (
    CalendarView,
    DateRange,
    GridCell,
    add_utc_days,
    add_utc_months,
    add_utc_years,
    end_of_utc_day,
    list_utc_days_in_range,
    month_grid_cells,
    range_for_calendar_view,
    start_of_utc_day,
    start_of_utc_week,
    to_instant_ms,
    to_utc_datetime,
)


def utc(*args) -> int:
    return to_instant_ms(datetime(*args, tzinfo=timezone.utc))


def iso(instant: int) -> str:
    return to_utc_datetime(instant).isoformat(timespec="milliseconds")


class TestConversions:
    """Tests for instant conversion helpers."""

    def test_round_trip_keeps_milliseconds(self):
        """Test that milliseconds survive conversion."""
        instant = utc(2026, 2, 7, 13, 45, 12, 345000)
        assert to_utc_datetime(instant) == datetime(2026, 2, 7, 13, 45, 12, 345000, tzinfo=timezone.utc)
        assert to_instant_ms(to_utc_datetime(instant)) == instant

    def test_naive_datetime_is_utc(self):
        """Test that naive datetimes are read as UTC."""
        assert to_instant_ms(datetime(1970, 1, 2)) == 86_400_000

    def test_aware_datetime_is_converted(self):
        """Test that offsets are applied."""
        plus_one = timezone(timedelta(hours=1))
        assert to_instant_ms(datetime(1970, 1, 1, 1, tzinfo=plus_one)) == 0


class TestDayPrimitives:
    """Tests for day boundary helpers."""

    def test_start_and_end_of_day(self):
        """Test truncating to the day boundaries."""
        anchor = utc(2026, 2, 7, 13, 45)
        assert iso(start_of_utc_day(anchor)) == "2026-02-07T00:00:00.000+00:00"
        assert iso(end_of_utc_day(anchor)) == "2026-02-07T23:59:59.999+00:00"

    def test_last_millisecond_stays_in_day(self):
        """Test that 23:59:59.999 belongs to its own day."""
        last = utc(2026, 2, 7, 23, 59, 59, 999000)
        assert start_of_utc_day(last) == utc(2026, 2, 7)
        assert end_of_utc_day(last) == last
        assert start_of_utc_day(last + 1) == utc(2026, 2, 8)

    def test_before_epoch(self):
        """Test day boundaries for negative instants."""
        assert start_of_utc_day(-1) == -86_400_000
        assert end_of_utc_day(-1) == -1

    def test_accepts_datetime(self):
        """Test that datetimes are accepted as instants."""
        assert start_of_utc_day(datetime(2026, 2, 7, 13, 45)) == utc(2026, 2, 7)

    def test_add_days_carries_into_month_and_year(self):
        """Test day addition across month and year ends."""
        assert add_utc_days(utc(2025, 12, 31, 10), 1) == utc(2026, 1, 1)
        assert add_utc_days(utc(2024, 3, 1), -1) == utc(2024, 2, 29)
        assert add_utc_days(utc(2026, 2, 1), 6) == utc(2026, 2, 7)
        assert add_utc_days(utc(2026, 2, 1), 0) == utc(2026, 2, 1)

    def test_add_months(self):
        """Test month paging returns the first of the month."""
        assert add_utc_months(utc(2026, 1, 31), 1) == utc(2026, 2, 1)
        assert add_utc_months(utc(2025, 11, 15), 3) == utc(2026, 2, 1)
        assert add_utc_months(utc(2026, 1, 15), -1) == utc(2025, 12, 1)
        assert add_utc_months(utc(2026, 1, 15), -13) == utc(2024, 12, 1)

    def test_add_years(self):
        """Test year paging."""
        assert add_utc_years(utc(2024, 2, 29), 1) == utc(2025, 2, 1)
        assert add_utc_years(utc(2026, 7, 4), -2) == utc(2024, 7, 1)

    def test_start_of_week(self):
        """Test that weeks start on Sunday."""
        # 2026-02-07 is a Saturday, 2026-02-01 a Sunday
        assert start_of_utc_week(utc(2026, 2, 7, 13, 45)) == utc(2026, 2, 1)
        assert start_of_utc_week(utc(2026, 2, 1, 0, 0)) == utc(2026, 2, 1)
        assert start_of_utc_week(utc(2026, 2, 2, 9)) == utc(2026, 2, 1)


class TestRangeForCalendarView:
    """Tests for range_for_calendar_view."""

    def test_builds_expected_ranges_for_all_views(self):
        """Test day, week, month and year ranges around one anchor."""
        anchor = utc(2026, 2, 7, 13, 45)

        day = range_for_calendar_view(anchor, CalendarView.DAY)
        assert iso(day.start) == "2026-02-07T00:00:00.000+00:00"
        assert iso(day.end) == "2026-02-07T23:59:59.999+00:00"

        week = range_for_calendar_view(anchor, CalendarView.WEEK)
        assert iso(week.start) == "2026-02-01T00:00:00.000+00:00"
        assert iso(week.end) == "2026-02-07T23:59:59.999+00:00"

        month = range_for_calendar_view(anchor, CalendarView.MONTH)
        assert iso(month.start) == "2026-02-01T00:00:00.000+00:00"
        assert iso(month.end) == "2026-02-28T23:59:59.999+00:00"

        year = range_for_calendar_view(anchor, CalendarView.YEAR)
        assert iso(year.start) == "2026-01-01T00:00:00.000+00:00"
        assert iso(year.end) == "2026-12-31T23:59:59.999+00:00"

    def test_view_accepts_string_value(self):
        """Test passing the view as its string value."""
        anchor = utc(2026, 2, 7)
        assert range_for_calendar_view(anchor, "week") == range_for_calendar_view(anchor, CalendarView.WEEK)

    def test_unknown_view(self):
        """Test that an unknown view is rejected."""
        with pytest.raises(ValueError):
            range_for_calendar_view(utc(2026, 2, 7), "fortnight")

    def test_week_crossing_year_boundary(self):
        """Test a week that starts in the previous year."""
        # 2026-01-01 is a Thursday
        week = range_for_calendar_view(utc(2026, 1, 1, 12), CalendarView.WEEK)
        assert week.start == utc(2025, 12, 28)
        assert week.end == end_of_utc_day(utc(2026, 1, 3))
        assert week.days == 7
        assert week.contains(utc(2026, 1, 1, 12))

    @pytest.mark.parametrize(
        "year, month, last_day",
        [
            (2026, 2, 28),
            (2024, 2, 29),
            (2000, 2, 29),
            (2100, 2, 28),
            (2026, 4, 30),
            (2026, 12, 31),
            (2026, 1, 31),
        ],
    )
    def test_month_last_day(self, year, month, last_day):
        """Test month ranges end on the correct last day."""
        month_range = range_for_calendar_view(utc(year, month, 15, 6), CalendarView.MONTH)
        assert month_range.start == utc(year, month, 1)
        assert month_range.end == end_of_utc_day(utc(year, month, last_day))
        assert month_range.days == last_day

    def test_year_of_leap_year(self):
        """Test year range for a leap year."""
        year = range_for_calendar_view(utc(2024, 7, 4), "year")
        assert year.start == utc(2024, 1, 1)
        assert year.end == end_of_utc_day(utc(2024, 12, 31))
        assert year.days == 366

    def test_last_supported_month_and_year(self):
        """Test December 9999 pages do not step into year 10000."""
        month = range_for_calendar_view(datetime(9999, 12, 15), CalendarView.MONTH)
        assert month.start == utc(9999, 12, 1)
        assert month.end == end_of_utc_day(utc(9999, 12, 31))
        assert month.days == 31

        year = range_for_calendar_view(datetime(9999, 6, 1), CalendarView.YEAR)
        assert year.end == end_of_utc_day(utc(9999, 12, 31))

    def test_day_range_at_last_millisecond(self):
        """Test that an anchor at 23:59:59.999 keeps its own day."""
        day = range_for_calendar_view(utc(2026, 2, 7, 23, 59, 59, 999000), "day")
        assert day == DateRange(utc(2026, 2, 7), end_of_utc_day(utc(2026, 2, 7)))
        assert day.days == 1


class TestDateRange:
    """Tests for DateRange helpers."""

    def test_contains_is_inclusive(self):
        """Test both ends are inside the range."""
        day = range_for_calendar_view(utc(2026, 2, 7), "day")
        assert day.contains(day.start)
        assert day.contains(day.end)
        assert not day.contains(day.end + 1)
        assert not day.contains(day.start - 1)

    def test_to_dict(self):
        """Test serialized form."""
        day = range_for_calendar_view(utc(2026, 2, 7), "day")
        assert day.to_dict() == {
            "start": "2026-02-07T00:00:00+00:00",
            "end": "2026-02-07T23:59:59.999000+00:00",
            "start_ms": day.start,
            "end_ms": day.end,
        }


class TestListDays:
    """Tests for list_utc_days_in_range."""

    def test_lists_each_day_start(self):
        """Test a one-week range."""
        days = list_utc_days_in_range(utc(2026, 2, 1), end_of_utc_day(utc(2026, 2, 7)))
        assert days == [utc(2026, 2, d) for d in range(1, 8)]

    def test_partial_days_are_included(self):
        """Test that the days containing both endpoints are listed."""
        days = list_utc_days_in_range(utc(2026, 2, 28, 22), utc(2026, 3, 1, 1))
        assert days == [utc(2026, 2, 28), utc(2026, 3, 1)]

    def test_last_supported_day(self):
        """Test listing days up to 9999-12-31."""
        days = list_utc_days_in_range(utc(9999, 12, 30), end_of_utc_day(utc(9999, 12, 31)))
        assert days == [utc(9999, 12, 30), utc(9999, 12, 31)]

    def test_end_before_start(self):
        """Test an inverted range has no days."""
        assert list_utc_days_in_range(utc(2026, 2, 7), utc(2026, 2, 6)) == []


class TestMonthGrid:
    """Tests for month_grid_cells."""

    def test_month_starting_on_sunday(self):
        """Test February 2026, which starts on a Sunday and fills four weeks."""
        cells = month_grid_cells(utc(2026, 2, 14))
        assert len(cells) == 28
        assert cells[0] == GridCell(utc(2026, 2, 1), True)
        assert cells[-1] == GridCell(utc(2026, 2, 28), True)

    def test_leading_and_trailing_padding(self):
        """Test February 2024, which starts on a Thursday."""
        cells = month_grid_cells(utc(2024, 2, 10))
        assert len(cells) == 35
        assert cells[:4] == [GridCell(None, False)] * 4
        assert cells[4] == GridCell(utc(2024, 2, 1), True)
        assert cells[32] == GridCell(utc(2024, 2, 29), True)
        assert cells[33:] == [GridCell(None, False)] * 2
        assert sum(1 for cell in cells if cell.in_month) == 29

    def test_last_supported_month(self):
        """Test December 9999, which starts on a Wednesday."""
        cells = month_grid_cells(utc(9999, 12, 31))
        assert len(cells) == 35
        assert cells[3] == GridCell(utc(9999, 12, 1), True)
        assert cells[33] == GridCell(utc(9999, 12, 31), True)
        assert cells[34] == GridCell(None, False)
