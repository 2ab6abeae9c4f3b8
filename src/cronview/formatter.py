"""Formatting utilities for calendar labels."""

from cronview.calendar import to_utc_datetime
from cronview.models import AtSchedule, CronSchedule, EverySchedule, Schedule

WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class ScheduleFormatter:
    """Static utility class for formatting schedules in the calendar.

    Provides consistent labels across calendar views:
    - Schedule descriptions
    - Occurrence counts
    """

    @staticmethod
    def describe(schedule: Schedule) -> str:
        """Short human-readable label for a schedule.

        Args:
            schedule: Any schedule kind

        Returns:
            Label such as "Every 6h", "Daily 9:00 AM" or the raw cron expression
        """
        if isinstance(schedule, EverySchedule):
            return ScheduleFormatter.format_interval(schedule.interval_ms)

        if isinstance(schedule, AtSchedule):
            return to_utc_datetime(schedule.instant_ms).strftime("%Y-%m-%d %H:%M UTC")

        if isinstance(schedule, CronSchedule):
            return ScheduleFormatter.format_cron(schedule.expression)

        return "Unknown"

    @staticmethod
    def format_interval(interval_ms: int) -> str:
        """Format an interval in milliseconds (e.g., "Every 30 min", "Every 2d")."""
        if interval_ms <= 0:
            return "Interval unknown"
        if interval_ms < 60_000:
            return f"Every {interval_ms / 1000:g}s"
        elif interval_ms < 3_600_000:
            return f"Every {interval_ms / 60_000:g} min"
        elif interval_ms < 86_400_000:
            return f"Every {interval_ms / 3_600_000:g}h"
        else:
            return f"Every {interval_ms / 86_400_000:g}d"

    @staticmethod
    def format_cron(expression: str) -> str:
        """Describe common cron shapes, falling back to the expression text."""
        parts = expression.split()
        if len(parts) != 5:
            return expression

        minute, hour, day_of_month, month, day_of_week = parts
        every_day = day_of_month == "*" and month == "*" and day_of_week == "*"

        if every_day and hour == "*":
            if minute.startswith("*/") and minute[2:].isdigit():
                return f"Every {int(minute[2:])} min"
            if "," in minute:
                return f"{len(minute.split(','))}× per hour"
            if minute.isdigit():
                return f"Hourly at :{int(minute):02d}"

        if minute.isdigit() and hour.isdigit() and int(hour) < 24:
            h = int(hour)
            period = "PM" if h >= 12 else "AM"
            clock = f"{h % 12 or 12}:{int(minute):02d} {period}"

            if every_day:
                return f"Daily {clock}"

            if day_of_month == "*" and month == "*" and day_of_week.isdigit() and int(day_of_week) <= 7:
                return f"Weekly on {WEEKDAY_NAMES[int(day_of_week)]} {clock}"

        return expression

    @staticmethod
    def format_count(count: int) -> str:
        """Label for a calendar cell; empty when nothing runs."""
        if count <= 0:
            return ""
        return "1 run" if count == 1 else f"{count} runs"
