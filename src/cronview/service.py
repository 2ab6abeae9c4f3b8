"""Service for building calendar page data."""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List

from cronview.calendar import (
    CalendarView,
    list_utc_days_in_range,
    range_for_calendar_view,
    to_utc_datetime,
)
from cronview.estimator import OccurrenceEstimator
from cronview.exceptions import ParseError
from cronview.models import Job

logger = logging.getLogger("cronview.service")


class CalendarService:
    """Service for preparing occurrence counts for a calendar page.

    Handles aggregation across jobs for:
    - Per-day totals shown in calendar cells
    - Per-job totals with an error marker for unparseable cron expressions

    A job whose cron expression cannot be parsed is reported, not counted,
    so the page can badge it instead of showing an empty schedule.
    """

    def __init__(self, estimator: OccurrenceEstimator | None = None):
        """Initialize calendar service.

        Args:
            estimator: OccurrenceEstimator used for counting (default instance if None)
        """
        self.estimator = estimator or OccurrenceEstimator()

    def get_calendar_data(
        self, jobs: Iterable[Job], anchor: "int | datetime", view: CalendarView | str
    ) -> Dict[str, Any]:
        """Get data for one calendar page.

        Args:
            jobs: Jobs to show
            anchor: Any instant inside the page
            view: Page granularity

        Returns:
            Dictionary with page data:
            {
                "view": "week",
                "range": {...},
                "days": [{"date": "2026-02-01", "date_ms": int, "count": int}, ...],
                "jobs": [{"id": str, "total": int, "error": str | None}, ...],
                "total": int
            }
        """
        view = CalendarView(view)
        date_range = range_for_calendar_view(anchor, view)

        day_totals: Dict[int, int] = {}
        job_rows: List[Dict[str, Any]] = []

        for job in jobs:
            try:
                per_day = self.estimator.estimate_runs_per_day(job, date_range.start, date_range.end)
            except ParseError as e:
                logger.warning(f"Skipping job {job.id}: {e}")
                job_rows.append({"id": job.id, "total": 0, "error": str(e)})
                continue

            for day in per_day:
                day_totals[day.date] = day_totals.get(day.date, 0) + day.count

            job_rows.append({
                "id": job.id,
                "total": sum(day.count for day in per_day),
                "error": None,
            })

        days = [
            {
                "date": to_utc_datetime(day).date().isoformat(),
                "date_ms": day,
                "count": day_totals.get(day, 0),
            }
            for day in list_utc_days_in_range(date_range.start, date_range.end)
        ]

        return {
            "view": view.value,
            "range": date_range.to_dict(),
            "days": days,
            "jobs": job_rows,
            "total": sum(row["total"] for row in job_rows),
        }
