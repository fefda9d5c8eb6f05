"""Domain models for the current caffeine status."""

from dataclasses import dataclass
from enum import Enum


class LevelStatus(Enum):
    """Current level relative to the daily maximum."""

    VERY_LOW = "very_low"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class AdviceKind(Enum):
    """Health advice derived from recent intake."""

    DAILY_LIMIT_EXCEEDED = "daily_limit_exceeded"
    WEEKLY_AVERAGE_HIGH = "weekly_average_high"
    EVENING_CAFFEINE = "evening_caffeine"
    HEALTHY = "healthy"


@dataclass(frozen=True)
class CaffeineStatus:
    """Snapshot of the caffeine level at a given instant."""

    now: int
    current_amount: float
    concentration: float | None
    target_amount: float | None
    hours_until_safe_sleep: float | None
    safe_sleep_at: int | None
    today_total: float
    percent_filled: float
    level: LevelStatus
    advice: AdviceKind
