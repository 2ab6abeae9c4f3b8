"""Custom exceptions for cronview."""

class CronViewError(Exception):
    pass


class ParseError(CronViewError, ValueError):
    """Raised when a cron expression cannot be parsed."""

    def __init__(self, expression: str, message: str, field: str | None = None):
        self.expression = expression
        self.field = field
        if field:
            super().__init__(f"Invalid cron expression '{expression}' ({field}): {message}")
        else:
            super().__init__(f"Invalid cron expression '{expression}': {message}")


class MissingReferenceError(CronViewError):
    """Raised when an interval job has no reference instant and one is required."""

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Job '{job_id}' has an interval schedule but no reference instant")


class RangeTooLargeError(CronViewError):
    """Raised when a date range spans more days than the estimator allows."""

    def __init__(self, days: int, max_days: int):
        self.days = days
        self.max_days = max_days
        super().__init__(f"Range of {days} days exceeds the limit of {max_days} days")
