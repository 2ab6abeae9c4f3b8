"""UTC calendar arithmetic for calendar views.

Instants are integer milliseconds since the Unix epoch. Every function that
accepts an instant also accepts a ``datetime``; naive datetimes are read as UTC.

All arithmetic goes through UTC calendar fields (year, month, day), never
through local time:

    >>> day = range_for_calendar_view(1770471900000, CalendarView.WEEK)
    >>> to_utc_datetime(day.start).isoformat()
    '2026-02-01T00:00:00+00:00'
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MS = timedelta(milliseconds=1)
DAY_MS = 24 * 60 * 60 * 1000
END_OF_DAY = time(23, 59, 59, 999000)


class CalendarView(Enum):
    """Calendar page granularity."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class DateRange:
    """Closed interval from the first millisecond of a UTC day to the last millisecond of a UTC day."""

    start: int
    end: int

    @property
    def days(self) -> int:
        """Number of calendar days covered by the range."""
        return (_utc_date(self.end) - _utc_date(self.start)).days + 1

    def contains(self, instant: "int | datetime") -> bool:
        return self.start <= to_instant_ms(instant) <= self.end

    def to_dict(self) -> dict:
        return {
            "start": to_utc_datetime(self.start).isoformat(),
            "end": to_utc_datetime(self.end).isoformat(),
            "start_ms": self.start,
            "end_ms": self.end,
        }


@dataclass(frozen=True)
class GridCell:
    """One cell of a month grid. ``date`` is the day start, or None for padding."""

    date: int | None
    in_month: bool


def to_instant_ms(value: "int | datetime") -> int:
    """Convert an instant or datetime to epoch milliseconds."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return (value - EPOCH) // ONE_MS
    return int(value)


def to_utc_datetime(instant: "int | datetime") -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return EPOCH + timedelta(milliseconds=to_instant_ms(instant))


def _utc_date(instant: "int | datetime") -> date:
    return to_utc_datetime(instant).date()


def _from_date(day: date, at: time = time()) -> int:
    return to_instant_ms(datetime.combine(day, at, tzinfo=timezone.utc))


def start_of_utc_day(instant: "int | datetime") -> int:
    return _from_date(_utc_date(instant))


def end_of_utc_day(instant: "int | datetime") -> int:
    return _from_date(_utc_date(instant), END_OF_DAY)


def add_utc_days(instant: "int | datetime", n: int) -> int:
    """Start of the UTC day ``n`` calendar days after the one containing ``instant``."""
    return _from_date(_utc_date(instant) + timedelta(days=n))


def _first_of_month(year: int, month: int) -> date:
    # month may run past either end of the year; carry into the year field
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return date(year, month, 1)


def add_utc_months(instant: "int | datetime", n: int) -> int:
    """First day of the month ``n`` months away from the one containing ``instant``."""
    day = _utc_date(instant)
    return _from_date(_first_of_month(day.year, day.month + n))


def add_utc_years(instant: "int | datetime", n: int) -> int:
    """First day of the same month ``n`` years away."""
    day = _utc_date(instant)
    return _from_date(date(day.year + n, day.month, 1))


def start_of_utc_week(instant: "int | datetime") -> int:
    """Sunday on or before the UTC day containing ``instant``."""
    day = _utc_date(instant)
    # date.weekday() is Monday=0, weeks here start on Sunday
    days_since_sunday = (day.weekday() + 1) % 7
    return _from_date(day - timedelta(days=days_since_sunday))


def _last_of_month(day: date) -> date:
    if day.month == 12:
        return date(day.year, 12, 31)
    # day 0 of the following month
    return date(day.year, day.month + 1, 1) - timedelta(days=1)


def range_for_calendar_view(anchor: "int | datetime", view: CalendarView | str) -> DateRange:
    """Build the day-aligned range a calendar page shows around ``anchor``.

    Args:
        anchor: Any instant inside the page
        view: Page granularity (enum member or its value)

    Returns:
        DateRange from the first to the last millisecond of the page
    """
    view = CalendarView(view)
    day = _utc_date(anchor)

    if view == CalendarView.DAY:
        start = start_of_utc_day(anchor)
        return DateRange(start, end_of_utc_day(start))

    if view == CalendarView.WEEK:
        start = start_of_utc_week(anchor)
        return DateRange(start, end_of_utc_day(add_utc_days(start, 6)))

    if view == CalendarView.MONTH:
        first = date(day.year, day.month, 1)
        return DateRange(_from_date(first), _from_date(_last_of_month(first), END_OF_DAY))

    return DateRange(
        _from_date(date(day.year, 1, 1)),
        _from_date(date(day.year, 12, 31), END_OF_DAY),
    )


def list_utc_days_in_range(start: "int | datetime", end: "int | datetime") -> list[int]:
    """Day starts from the day containing ``start`` through the day containing ``end``."""
    first, last = _utc_date(start), _utc_date(end)
    return [_from_date(first + timedelta(days=offset)) for offset in range((last - first).days + 1)]


def month_grid_cells(anchor: "int | datetime") -> list[GridCell]:
    """Sunday-first grid of the month containing ``anchor``, padded to whole weeks."""
    day = _utc_date(anchor)
    first = date(day.year, day.month, 1)
    last = _last_of_month(first)
    leading = (first.weekday() + 1) % 7

    cells = [GridCell(None, False) for _ in range(leading)]
    for offset in range(last.day):
        cells.append(GridCell(_from_date(first + timedelta(days=offset)), True))

    while len(cells) % 7 != 0:
        cells.append(GridCell(None, False))

    return cells
