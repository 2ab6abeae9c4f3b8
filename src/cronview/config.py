import os
from dataclasses import dataclass
from typing import Any


@dataclass
class EstimatorConfig:
    """Occurrence estimator configuration.

    Args:
        cron_cache_size: Number of parsed cron expressions kept in the LRU cache (0 disables it)
        require_reference_instant: Reject interval jobs without a reference instant instead of
            anchoring them to the start of the queried day
        max_range_days: Largest number of days a single range estimation may cover
    """
    cron_cache_size: int = 256
    require_reference_instant: bool = False
    max_range_days: int = 3660

    def __post_init__(self):
        """Validate estimator configuration."""
        if self.cron_cache_size < 0:
            raise ValueError("cron_cache_size must be non-negative")

        if self.max_range_days < 1:
            raise ValueError("max_range_days must be at least 1")

    @classmethod
    def from_env(cls, prefix: str = "CRONVIEW_") -> "EstimatorConfig":
        """Load configuration from environment variables using mappings."""

        def get_env(key: str, default: Any = None, type_cast: type = str) -> Any:
            value = os.getenv(f"{prefix}{key.upper()}")

            if value is None:
                return default
            if type_cast == bool:
                return value.lower() in ('true', '1', 'yes', 'on')
            elif type_cast == int:
                return int(value)
            else:
                return value

        estimator_map = {
            "cron_cache_size": ("cron_cache_size", int, 256),
            "require_reference_instant": ("require_reference_instant", bool, False),
            "max_range_days": ("max_range_days", int, 3660),
        }

        kwargs = {}
        for field, (env_name, type_cast, default) in estimator_map.items():
            kwargs[field] = get_env(env_name, default=default, type_cast=type_cast)

        return cls(**kwargs)
