"""cronview - occurrence estimation for scheduled-job calendars.

Counts how many times a job fires on UTC calendar days without running
anything. Three schedule kinds are supported: fixed intervals, one-time
instants and five-field cron expressions.

Basic usage:
    from cronview import (
        CalendarView,
        CronSchedule,
        Job,
        estimate_runs_in_utc_range,
        range_for_calendar_view,
    )

    job = Job(id="reports", enabled=True, schedule=CronSchedule("0 9 1 * 1"))
    month = range_for_calendar_view(anchor_ms, CalendarView.MONTH)
    runs = estimate_runs_in_utc_range(job, month.start, month.end)

Calendar pages across many jobs:
    from cronview import CalendarService

    data = CalendarService().get_calendar_data(jobs, anchor_ms, "week")
"""

__version__ = "0.1.0"

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
from cronview.config import EstimatorConfig
from cronview.cron import CronExpression, CronField, parse_cron_expression
from cronview.estimator import (
    DayCount,
    OccurrenceEstimator,
    count_every_runs_in_range,
    estimate_runs_for_utc_date,
    estimate_runs_in_utc_range,
    estimate_runs_per_day,
)
from cronview.formatter import ScheduleFormatter
from cronview.models import AtSchedule, CronSchedule, EverySchedule, Job, Schedule, ScheduleType
from cronview.service import CalendarService
from cronview.exceptions import (
    CronViewError,
    ParseError,
    MissingReferenceError,
    RangeTooLargeError,
)

__all__ = [
    # Calendar ranges
    "CalendarView",
    "DateRange",
    "GridCell",
    "add_utc_days",
    "add_utc_months",
    "add_utc_years",
    "end_of_utc_day",
    "list_utc_days_in_range",
    "month_grid_cells",
    "range_for_calendar_view",
    "start_of_utc_day",
    "start_of_utc_week",
    "to_instant_ms",
    "to_utc_datetime",
    # Cron
    "CronExpression",
    "CronField",
    "parse_cron_expression",
    # Estimation
    "DayCount",
    "OccurrenceEstimator",
    "count_every_runs_in_range",
    "estimate_runs_for_utc_date",
    "estimate_runs_in_utc_range",
    "estimate_runs_per_day",
    "CalendarService",
    "ScheduleFormatter",
    # Configuration
    "EstimatorConfig",
    # Models
    "AtSchedule",
    "CronSchedule",
    "EverySchedule",
    "Job",
    "Schedule",
    "ScheduleType",
    # Exceptions
    "CronViewError",
    "ParseError",
    "MissingReferenceError",
    "RangeTooLargeError",
]
