"""Calendar usage example for cronview.

This example shows:
1. Building jobs from job store records
2. Computing the range for a calendar page
3. Counting runs per job and per day
4. Surfacing a broken cron expression instead of hiding it
"""

import logging
from datetime import datetime, timezone

from cronview import (
    CalendarService,
    CalendarView,
    Job,
    ScheduleFormatter,
    estimate_runs_in_utc_range,
    range_for_calendar_view,
    to_instant_ms,
)

logging.basicConfig(level=logging.INFO)


def main():
    """Main example demonstrating cronview usage."""
    print("cronview Calendar Example")
    print("=" * 60)

    anchor = to_instant_ms(datetime(2026, 2, 7, 13, 45, tzinfo=timezone.utc))

    records = [
        {"id": "heartbeat", "schedule": {"kind": "every", "everyMs": 6 * 60 * 60 * 1000},
         "state": {"nextRunAtMs": to_instant_ms(datetime(2026, 2, 7, tzinfo=timezone.utc))}},
        {"id": "standup", "schedule": {"kind": "cron", "expr": "0 9 * * 1-5"}},
        {"id": "monthly-or-monday", "schedule": {"kind": "cron", "expr": "0 9 1 * 1"}},
        {"id": "launch", "schedule": {"kind": "at", "atMs": to_instant_ms(datetime(2026, 2, 3, 15, tzinfo=timezone.utc))}},
        {"id": "paused", "enabled": False, "schedule": {"kind": "cron", "expr": "* * * * *"}},
        {"id": "typo", "schedule": {"kind": "cron", "expr": "0 9 * *"}},
    ]
    jobs = [Job.from_dict(record) for record in records]

    # Single job over a month
    month = range_for_calendar_view(anchor, CalendarView.MONTH)
    standup = jobs[1]
    runs = estimate_runs_in_utc_range(standup, month.start, month.end)
    print(f"\n1. '{standup.id}' ({ScheduleFormatter.describe(standup.schedule)}): {runs} runs in February")

    # Whole week page
    data = CalendarService().get_calendar_data(jobs, anchor, CalendarView.WEEK)

    print(f"\n2. Week of {data['days'][0]['date']}:")
    for day in data["days"]:
        print(f"   {day['date']}: {ScheduleFormatter.format_count(day['count']) or '-'}")

    print("\n3. Jobs:")
    for row in data["jobs"]:
        status = f"error: {row['error']}" if row["error"] else f"{row['total']} runs"
        print(f"   {row['id']}: {status}")

    print("\n" + "=" * 60)
    print(f"Total: {data['total']} runs")


if __name__ == "__main__":
    main()
