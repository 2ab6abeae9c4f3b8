"""Occurrence estimation for calendar display."""

import logging
from dataclasses import dataclass
from datetime import datetime

from cronview.calendar import (
    DAY_MS,
    end_of_utc_day,
    list_utc_days_in_range,
    start_of_utc_day,
    to_instant_ms,
)
from cronview.config import EstimatorConfig
from cronview.cron import CronCache
from cronview.exceptions import MissingReferenceError, RangeTooLargeError
from cronview.models import AtSchedule, CronSchedule, EverySchedule, Job

logger = logging.getLogger("cronview.estimator")


@dataclass(frozen=True)
class DayCount:
    """Estimated runs on one UTC day. ``date`` is the day start."""

    date: int
    count: int


def count_every_runs_in_range(interval_ms: int, reference_ms: int, start_ms: int, end_ms: int) -> int:
    """Count instants ``reference_ms + k * interval_ms`` inside ``[start_ms, end_ms]``.

    ``k`` ranges over all integers, so the reference may lie before, inside or
    after the window.
    """
    if interval_ms <= 0 or end_ms < start_ms:
        return 0

    # smallest k with reference + k * interval >= start
    first_multiplier = -((reference_ms - start_ms) // interval_ms)
    first_run = reference_ms + first_multiplier * interval_ms
    if first_run > end_ms:
        return 0

    return (end_ms - first_run) // interval_ms + 1


class OccurrenceEstimator:
    """Estimates how often a job fires on UTC calendar days.

    Holds no state between calls apart from the parsed cron expression cache,
    so one instance can serve concurrent requests.

    Args:
        config: Estimator configuration (defaults to EstimatorConfig())

    Example:
        estimator = OccurrenceEstimator()
        job = Job(id="nightly", enabled=True, schedule=CronSchedule("0 2 * * *"))
        week = range_for_calendar_view(now_ms, CalendarView.WEEK)
        estimator.estimate_runs_in_utc_range(job, week.start, week.end)  # 7
    """

    def __init__(self, config: EstimatorConfig | None = None):
        self.config = config or EstimatorConfig()
        self.cron_cache = CronCache(max_size=self.config.cron_cache_size)

    def estimate_runs_for_utc_date(self, job: Job, date: "int | datetime") -> int:
        """Count firings of ``job`` within the UTC day containing ``date``.

        Args:
            job: Job to estimate
            date: Any instant inside the day

        Returns:
            Number of firings, 0 for disabled jobs

        Raises:
            ParseError: If a cron schedule cannot be parsed
            MissingReferenceError: If an interval job has no reference instant
                and the configuration requires one
        """
        if not job.enabled:
            return 0

        day_start = start_of_utc_day(date)
        day_end = end_of_utc_day(day_start)
        schedule = job.schedule

        if isinstance(schedule, EverySchedule):
            if schedule.interval_ms <= 0:
                return 0

            reference = job.reference_instant_ms
            if reference is None:
                if self.config.require_reference_instant:
                    raise MissingReferenceError(job.id)
                reference = day_start

            return count_every_runs_in_range(schedule.interval_ms, reference, day_start, day_end)

        if isinstance(schedule, AtSchedule):
            return 1 if day_start <= schedule.instant_ms <= day_end else 0

        if isinstance(schedule, CronSchedule):
            expression = self.cron_cache.get(schedule.expression)
            return expression.count_utc_day(day_start)

        raise TypeError(f"Unsupported schedule type: {type(schedule).__name__}")

    def estimate_runs_per_day(
        self, job: Job, start: "int | datetime", end: "int | datetime"
    ) -> list[DayCount]:
        """Per-day counts from the day containing ``start`` through the day containing ``end``.

        Raises:
            RangeTooLargeError: If the range covers more than ``max_range_days`` days
        """
        start_ms, end_ms = to_instant_ms(start), to_instant_ms(end)
        if end_ms >= start_ms:
            span = (start_of_utc_day(end_ms) - start_of_utc_day(start_ms)) // DAY_MS + 1
            if span > self.config.max_range_days:
                raise RangeTooLargeError(span, self.config.max_range_days)

        return [
            DayCount(date=day, count=self.estimate_runs_for_utc_date(job, day))
            for day in list_utc_days_in_range(start_ms, end_ms)
        ]

    def estimate_runs_in_utc_range(self, job: Job, start: "int | datetime", end: "int | datetime") -> int:
        """Sum of the per-day counts over every day from ``start`` through ``end``."""
        per_day = self.estimate_runs_per_day(job, start, end)
        total = sum(day.count for day in per_day)
        logger.debug(f"Job {job.id}: {total} runs over {len(per_day)} days")
        return total


_default_estimator = OccurrenceEstimator()


def estimate_runs_for_utc_date(job: Job, date: "int | datetime") -> int:
    return _default_estimator.estimate_runs_for_utc_date(job, date)


def estimate_runs_per_day(job: Job, start: "int | datetime", end: "int | datetime") -> list[DayCount]:
    return _default_estimator.estimate_runs_per_day(job, start, end)


def estimate_runs_in_utc_range(job: Job, start: "int | datetime", end: "int | datetime") -> int:
    return _default_estimator.estimate_runs_in_utc_range(job, start, end)
