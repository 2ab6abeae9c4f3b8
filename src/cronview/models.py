"""Schedule and job models consumed by the occurrence estimator."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class ScheduleType(Enum):
    """Kind of schedule attached to a job."""
    EVERY = "every"
    AT = "at"
    CRON = "cron"


@dataclass(frozen=True)
class EverySchedule:
    """Fires at every multiple of ``interval_ms`` from the job's reference instant.

    A non-positive interval is accepted and never fires.
    """

    interval_ms: int

    @property
    def kind(self) -> ScheduleType:
        return ScheduleType.EVERY

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "everyMs": self.interval_ms}


@dataclass(frozen=True)
class AtSchedule:
    """Fires once, at ``instant_ms``."""

    instant_ms: int

    @property
    def kind(self) -> ScheduleType:
        return ScheduleType.AT

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "atMs": self.instant_ms}


@dataclass(frozen=True)
class CronSchedule:
    """Fires on every UTC minute matched by a five-field cron expression.

    The expression is parsed when occurrences are estimated, not here.
    """

    expression: str

    @property
    def kind(self) -> ScheduleType:
        return ScheduleType.CRON

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "expr": self.expression}


Schedule = Union[EverySchedule, AtSchedule, CronSchedule]


def schedule_from_dict(data: dict[str, Any]) -> Schedule:
    """Build a schedule from its stored form.

    Args:
        data: Mapping with ``kind`` and the matching ``everyMs``/``atMs``/``expr`` key

    Raises:
        ValueError: If the kind is unknown or its value is missing
    """
    kind = ScheduleType(data.get("kind"))

    if kind == ScheduleType.EVERY:
        if data.get("everyMs") is None:
            raise ValueError("Interval schedule requires 'everyMs'")
        return EverySchedule(interval_ms=int(data["everyMs"]))

    if kind == ScheduleType.AT:
        if data.get("atMs") is None:
            raise ValueError("One-time schedule requires 'atMs'")
        return AtSchedule(instant_ms=int(data["atMs"]))

    return CronSchedule(expression=data.get("expr") or "")


@dataclass(frozen=True)
class Job:
    """A scheduled job as seen by the calendar.

    Attributes:
        id: Job identifier, used only for reporting
        enabled: Disabled jobs never contribute occurrences
        schedule: When the job fires
        reference_instant_ms: Phase anchor for interval schedules, typically the
            job's next (or last) computed run. Ignored by other schedule kinds.
    """

    id: str
    enabled: bool
    schedule: Schedule
    reference_instant_ms: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "enabled": self.enabled,
            "schedule": self.schedule.to_dict(),
            "referenceInstantMs": self.reference_instant_ms,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Job":
        """Create from a job store record.

        Run timestamps may sit at top level or under ``state``. When
        ``referenceInstantMs`` is absent an interval job is anchored on its
        next run, or on its last run plus one interval. A one-time schedule
        without ``atMs`` falls back to the next run, then the last run.
        """
        state = data.get("state") or {}
        next_run = data.get("nextRunAtMs", state.get("nextRunAtMs"))
        last_run = data.get("lastRunAtMs", state.get("lastRunAtMs"))

        raw_schedule = dict(data.get("schedule") or {})
        if raw_schedule.get("kind") == ScheduleType.AT.value and raw_schedule.get("atMs") is None:
            raw_schedule["atMs"] = next_run if next_run is not None else last_run

        schedule = schedule_from_dict(raw_schedule)

        reference = data.get("referenceInstantMs")
        if reference is None and isinstance(schedule, EverySchedule):
            if next_run is not None:
                reference = next_run
            elif last_run is not None:
                reference = last_run + schedule.interval_ms

        return cls(
            id=str(data["id"]),
            enabled=data.get("enabled", True),
            schedule=schedule,
            reference_instant_ms=int(reference) if reference is not None else None,
        )
