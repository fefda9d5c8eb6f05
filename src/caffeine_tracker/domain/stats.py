"""Domain models for statistics."""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class SortBy(Enum):
    """Metric used to rank and weight a source distribution."""

    AMOUNT = "amount"
    COUNT = "count"


class StatsView(Enum):
    """Calendar period shown by the statistics view."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class BucketTotal:
    """Total intake for one calendar bucket."""

    label: str
    value: float
    date: date
    start: int
    end: int


@dataclass(frozen=True)
class SourceShare:
    """Intake attributed to one drink or label."""

    key: str
    display_name: str
    amount: float
    count: int
    percentage: int


@dataclass(frozen=True)
class SeriesPoint:
    """Sampled caffeine level for the metabolism chart."""

    time: int
    caffeine: float


@dataclass(frozen=True)
class PeriodStats:
    """Summary statistics over the buckets of a period."""

    max_value: float
    min_value: float
    avg_value: float
    active_days: int
    total_days: int
    consistency_rate: int
    std_dev: float
    max_bucket: BucketTotal
    min_bucket: BucketTotal | None


@dataclass(frozen=True)
class IntakeInsights:
    """Long-run intake habits across all records."""

    total_days: int
    exceed_days: int
    exceed_rate: int
    hourly_distribution: list[float]
    peak_hour: int
    peak_amount: float
    avg_interval_hours: float
    max_single_intake: float
    max_streak: int
    current_streak: int
    weekday_totals: list[float]
