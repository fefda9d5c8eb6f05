"""Statistics service for intake records."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import timedelta
from zoneinfo import ZoneInfo

from caffeine_tracker.domain.intake import IntakeRecord
from caffeine_tracker.domain.parameters import UserParameters
from caffeine_tracker.domain.stats import (
    BucketTotal,
    IntakeInsights,
    PeriodStats,
    SortBy,
    SourceShare,
    StatsView,
)
from caffeine_tracker.services import calendar
from caffeine_tracker.services.aggregation import (
    daily_totals_for_month,
    daily_totals_for_week,
    hourly_totals_for_day,
    monthly_totals_for_year,
    source_distribution,
    total_in_range,
)
from caffeine_tracker.services.decay import valid_records
from caffeine_tracker.services.insights import intake_insights, period_stats


@dataclass
class DaySummary:
    """Totals for a single local day."""

    start: int
    end: int
    total: float
    hourly: list[float]


@dataclass
class PeriodSummary:
    """Aggregated totals for a week, month or year."""

    view: StatsView
    start: int
    end: int
    total: float
    buckets: list[BucketTotal]
    stats: PeriodStats | None


@dataclass
class StatsService:
    """Service for computing intake statistics in a given timezone."""

    parameters: UserParameters

    def get_day(
        self, records: Sequence[IntakeRecord | None], anchor: int, tz: ZoneInfo
    ) -> DaySummary:
        """Return the total and hourly breakdown of the day containing ``anchor``."""
        records = valid_records(records)
        start = calendar.start_of_day(anchor, tz)
        end = calendar.end_of_day(anchor, tz)
        return DaySummary(
            start=start,
            end=end,
            total=total_in_range(records, start, end),
            hourly=hourly_totals_for_day(records, anchor, tz),
        )

    def get_period(
        self,
        records: Sequence[IntakeRecord | None],
        view: StatsView,
        anchor: int,
        tz: ZoneInfo,
    ) -> PeriodSummary:
        """Return buckets, total and summary statistics for one period."""
        records = valid_records(records)
        start, end = period_bounds(view, anchor, tz)
        if view is StatsView.WEEK:
            buckets = daily_totals_for_week(records, anchor, tz)
        elif view is StatsView.MONTH:
            buckets = daily_totals_for_month(records, anchor, tz)
        else:
            buckets = monthly_totals_for_year(records, anchor, tz)
        return PeriodSummary(
            view=view,
            start=start,
            end=end,
            total=total_in_range(records, start, end),
            buckets=buckets,
            stats=period_stats(buckets),
        )

    def get_distribution(
        self,
        records: Sequence[IntakeRecord | None],
        sort_by: SortBy = SortBy.AMOUNT,
        drink_names: Mapping[str, str] | None = None,
    ) -> list[SourceShare]:
        """Return the intake breakdown by source across all records."""
        return source_distribution(records, sort_by, drink_names)

    def get_insights(
        self, records: Sequence[IntakeRecord | None], now: int, tz: ZoneInfo
    ) -> IntakeInsights | None:
        """Return long-run habits measured against the effective daily limit."""
        return intake_insights(
            records, self.parameters.effective_max_daily_mg, now, tz
        )

    @staticmethod
    def shift_anchor(view: StatsView, anchor: int, direction: int, tz: ZoneInfo) -> int:
        """Move ``anchor`` by ``direction`` whole periods."""
        moment = calendar.to_datetime(anchor, tz)
        if view is StatsView.WEEK:
            day = moment.date() + timedelta(days=7 * direction)
        elif view is StatsView.MONTH:
            day = calendar.add_months(moment.date(), direction)
        else:
            day = moment.date().replace(year=moment.year + direction, month=1, day=1)
        return calendar.day_bounds(day, tz)[0]

    @classmethod
    def is_next_period_disabled(
        cls, view: StatsView, anchor: int, now: int, tz: ZoneInfo
    ) -> bool:
        """Return True when the period after ``anchor`` starts in the future."""
        next_anchor = cls.shift_anchor(view, anchor, 1, tz)
        return period_bounds(view, next_anchor, tz)[0] > now


def period_bounds(view: StatsView, anchor: int, tz: ZoneInfo) -> tuple[int, int]:
    """Return the first and last millisecond of the period containing ``anchor``."""
    if view is StatsView.WEEK:
        return calendar.start_of_week(anchor, tz), calendar.end_of_week(anchor, tz)
    if view is StatsView.MONTH:
        return calendar.start_of_month(anchor, tz), calendar.end_of_month(anchor, tz)
    return calendar.start_of_year(anchor, tz), calendar.end_of_year(anchor, tz)
