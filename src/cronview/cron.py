"""Cron expression parser and matcher.

Supports standard cron syntax, evaluated in UTC:
    - Minute (0-59)
    - Hour (0-23)
    - Day of month (1-31)
    - Month (1-12)
    - Day of week (0-7, where 0 and 7 are Sunday)

Special characters:
    - * (any value)
    - , (value list separator)
    - - (range of values)
    - / (step values)

When both day of month and day of week are restricted, a day matches if
either of them matches:
    "0 9 1 * 1" - 9 AM on the 1st of the month and 9 AM on every Monday

Examples:
    "*/5 * * * *" - Every 5 minutes
    "0 */2 * * *" - Every 2 hours
    "0 9 * * 1-5" - 9 AM on weekdays
    "0 0 1 * *" - First day of every month at midnight
"""

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterator

from cronview.calendar import start_of_utc_day, to_utc_datetime
from cronview.exceptions import ParseError

logger = logging.getLogger("cronview.cron")

MINUTE_MS = 60 * 1000
MINUTES_PER_DAY = 24 * 60

# name: (min, max) as accepted in the expression text
FIELD_BOUNDS = {
    "minute": (0, 59),
    "hour": (0, 23),
    "day_of_month": (1, 31),
    "month": (1, 12),
    "day_of_week": (0, 7),
}

# last value reached by "*/n" and "a/n"; 7 is only accepted as another name for Sunday
STEP_MAX = {"day_of_week": 6}


@dataclass(frozen=True)
class CronField:
    """Allowed values of one field.

    ``is_wildcard`` is True only when the field text is exactly ``*``; ``*/1`` or
    ``0-6`` cover every value but still count as restricted.
    """

    values: frozenset[int]
    is_wildcard: bool = False

    def __contains__(self, value: int) -> bool:
        return value in self.values


class CronExpression:
    """Parse and evaluate cron expressions."""

    def __init__(self, expression: str):
        """Initialize cron expression.

        Args:
            expression: Cron expression string (5 fields: minute hour day month weekday)

        Raises:
            ParseError: If expression format is invalid
        """
        if not isinstance(expression, str) or not expression.strip():
            raise ParseError(str(expression), "expression is empty")

        parts = expression.split()
        self.expression = " ".join(parts)

        if len(parts) != 5:
            raise ParseError(
                self.expression,
                f"expected 5 fields (minute hour day month weekday), got {len(parts)}",
            )

        self.minute = self._parse_field("minute", parts[0])
        self.hour = self._parse_field("hour", parts[1])
        self.day_of_month = self._parse_field("day_of_month", parts[2])
        self.month = self._parse_field("month", parts[3])
        self.day_of_week = self._parse_weekday_field(parts[4])

    def _int(self, name: str, text: str) -> int:
        if not (text.isascii() and text.isdigit()):
            raise ParseError(self.expression, f"'{text}' is not a number", name)
        return int(text)

    def _bounded(self, name: str, text: str) -> int:
        min_val, max_val = FIELD_BOUNDS[name]
        value = self._int(name, text)
        if not min_val <= value <= max_val:
            raise ParseError(
                self.expression, f"value {value} out of range [{min_val}, {max_val}]", name
            )
        return value

    def _parse_field(self, name: str, field: str) -> CronField:
        """Parse a cron field into the set of values it allows.

        Args:
            name: Field name, a key of FIELD_BOUNDS
            field: Cron field string (e.g., "*/5", "1-10", "1,3,5")

        Returns:
            CronField with the allowed values

        Raises:
            ParseError: If field format is invalid
        """
        min_val, max_val = FIELD_BOUNDS[name]
        step_max = STEP_MAX.get(name, max_val)

        if field == "*":
            return CronField(frozenset(range(min_val, max_val + 1)), is_wildcard=True)

        values = set()

        for part in field.split(","):
            if not part:
                raise ParseError(self.expression, f"empty list item in '{field}'", name)

            step = 1
            if "/" in part:
                # Step values: */5, 10-20/2 or 10/5
                part, _, step_str = part.partition("/")
                step = self._int(name, step_str)
                if step <= 0:
                    raise ParseError(self.expression, f"step must be positive, got {step}", name)

                if part == "*":
                    start, end = min_val, step_max
                elif "-" in part:
                    start, end = self._parse_range(name, part)
                else:
                    start, end = self._bounded(name, part), step_max

            elif "-" in part:
                start, end = self._parse_range(name, part)

            else:
                start = end = self._bounded(name, part)

            values.update(range(start, end + 1, step))

        return CronField(frozenset(values))

    def _parse_range(self, name: str, part: str) -> tuple[int, int]:
        start_str, _, end_str = part.partition("-")
        start, end = self._bounded(name, start_str), self._bounded(name, end_str)

        if start > end:
            raise ParseError(self.expression, f"invalid range {part} (start > end)", name)

        return start, end

    def _parse_weekday_field(self, field: str) -> CronField:
        """Parse weekday field, treating both 0 and 7 as Sunday."""
        parsed = self._parse_field("day_of_week", field)
        weekdays = set(parsed.values)

        if 7 in weekdays:
            weekdays.remove(7)
            weekdays.add(0)

        return CronField(frozenset(weekdays), is_wildcard=parsed.is_wildcard)

    def day_matches(self, day_of_month: int, day_of_week: int) -> bool:
        """Apply the day-of-month / day-of-week rule.

        If both fields are restricted either one may match. If only one is
        restricted it alone decides.
        """
        dom_restricted = not self.day_of_month.is_wildcard
        dow_restricted = not self.day_of_week.is_wildcard

        if dom_restricted and dow_restricted:
            return day_of_month in self.day_of_month or day_of_week in self.day_of_week
        if dom_restricted:
            return day_of_month in self.day_of_month
        if dow_restricted:
            return day_of_week in self.day_of_week
        return True

    def matches(
        self, minute: int, hour: int, day_of_month: int, month: int, day_of_week: int
    ) -> bool:
        """Check calendar fields against the expression.

        Args:
            minute: 0-59
            hour: 0-23
            day_of_month: 1-31
            month: 1-12
            day_of_week: 0-6, 0 is Sunday

        Returns:
            True if the fields match the cron schedule
        """
        return (
            minute in self.minute
            and hour in self.hour
            and month in self.month
            and self.day_matches(day_of_month, day_of_week)
        )

    def matches_datetime(self, dt: datetime) -> bool:
        """Check if datetime matches the cron expression, evaluated in UTC."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        dt = dt.astimezone(timezone.utc)

        # Python: Mon=0, ..., Sun=6. Cron: Sun=0, Mon=1, ..., Sat=6
        cron_weekday = (dt.weekday() + 1) % 7

        return self.matches(dt.minute, dt.hour, dt.day, dt.month, cron_weekday)

    def iter_utc_day(self, day: "int | datetime") -> Iterator[int]:
        """Yield every matching minute of the UTC day containing ``day``.

        Walks all 1440 minutes of the day in order. Calendar fields are read
        once per day since only minute and hour change within it.
        """
        day_start = start_of_utc_day(day)
        dt = to_utc_datetime(day_start)
        cron_weekday = (dt.weekday() + 1) % 7

        for offset in range(MINUTES_PER_DAY):
            hour, minute = divmod(offset, 60)
            if self.matches(minute, hour, dt.day, dt.month, cron_weekday):
                yield day_start + offset * MINUTE_MS

    def count_utc_day(self, day: "int | datetime") -> int:
        return sum(1 for _ in self.iter_utc_day(day))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CronExpression):
            return NotImplemented
        return self.expression == other.expression

    def __hash__(self) -> int:
        return hash(self.expression)

    def __str__(self) -> str:
        """String representation."""
        return self.expression

    def __repr__(self) -> str:
        """Developer representation."""
        return f"CronExpression('{self.expression}')"


class CronCache:
    """Bounded LRU cache of parsed expressions keyed by normalized text.

    Failed parses are not stored, so a bad expression raises on every lookup.
    """

    def __init__(self, max_size: int = 256):
        self.max_size = max_size
        self._entries: OrderedDict[str, CronExpression] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, expression: str) -> CronExpression:
        key = " ".join(expression.split()) if isinstance(expression, str) else expression

        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._entries.move_to_end(key)
                return cached

        parsed = CronExpression(expression)
        logger.debug(f"Parsed cron expression '{parsed.expression}'")

        if self.max_size > 0:
            with self._lock:
                self._entries[key] = parsed
                if len(self._entries) > self.max_size:
                    self._entries.popitem(last=False)

        return parsed

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self):
        with self._lock:
            return len(self._entries)


_default_cache = CronCache()


def parse_cron_expression(expression: str) -> CronExpression:
    """Parse ``expression``, reusing a cached result when available.

    Raises:
        ParseError: If the expression is malformed
    """
    return _default_cache.get(expression)
