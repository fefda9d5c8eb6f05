"""Period statistics and long-run intake habits."""

import math
from collections import defaultdict
from collections.abc import Iterable
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from caffeine_tracker.domain.intake import IntakeRecord
from caffeine_tracker.domain.stats import BucketTotal, IntakeInsights, PeriodStats
from caffeine_tracker.numbers import round_half_up, round_half_up_tenth
from caffeine_tracker.services import calendar
from caffeine_tracker.services.decay import MS_PER_HOUR, valid_records

MAX_INTERVAL_HOURS = 24


def period_stats(buckets: list[BucketTotal]) -> PeriodStats | None:
    """Summarize the buckets of one statistics period."""
    if not buckets:
        return None

    values = [bucket.value for bucket in buckets]
    active = [value for value in values if value > 0]
    max_value = max(values)
    min_value = min(active) if active else 0.0
    avg_value = sum(active) / len(active) if active else 0.0
    variance = (
        sum((value - avg_value) ** 2 for value in active) / len(active)
        if active
        else 0.0
    )

    return PeriodStats(
        max_value=max_value,
        min_value=min_value,
        avg_value=avg_value,
        active_days=len(active),
        total_days=len(values),
        consistency_rate=round_half_up(len(active) / len(values) * 100),
        std_dev=math.sqrt(variance),
        max_bucket=next(bucket for bucket in buckets if bucket.value == max_value),
        min_bucket=next(
            (bucket for bucket in buckets if active and bucket.value == min_value),
            None,
        ),
    )


def intake_insights(
    records: Iterable[IntakeRecord | None],
    effective_max_daily: float,
    now: float,
    tz: ZoneInfo,
) -> IntakeInsights | None:
    """Describe intake habits across every record, or None without data."""
    dated = _dated_records(records, tz)
    if not dated:
        return None

    daily_totals: dict[date, float] = defaultdict(float)
    hourly = [0.0] * 24
    weekday_totals = [0.0] * 7
    for record, moment in dated:
        daily_totals[moment.date()] += record.amount
        hourly[moment.hour] += record.amount
        weekday_totals[moment.weekday()] += record.amount

    total_days = len(daily_totals)
    exceed_days = sum(
        1 for total in daily_totals.values() if total > effective_max_daily
    )
    peak_amount = max(hourly)

    max_single_intake = max(record.amount for record, _ in dated)
    days = sorted(daily_totals)
    today = calendar.local_date(now, tz)

    return IntakeInsights(
        total_days=total_days,
        exceed_days=exceed_days,
        exceed_rate=round_half_up(exceed_days / total_days * 100),
        hourly_distribution=hourly,
        peak_hour=hourly.index(peak_amount),
        peak_amount=peak_amount,
        avg_interval_hours=round_half_up_tenth(_average_interval_hours(dated)),
        max_single_intake=max_single_intake,
        max_streak=_longest_streak(days),
        current_streak=_current_streak(days, today),
        weekday_totals=weekday_totals,
    )


def _dated_records(
    records: Iterable[IntakeRecord | None], tz: ZoneInfo
) -> list[tuple[IntakeRecord, datetime]]:
    dated = []
    for record in valid_records(records):
        try:
            moment = calendar.to_datetime(record.timestamp, tz)
        except (OverflowError, ValueError):
            continue
        dated.append((record, moment))
    return dated


def _average_interval_hours(dated: list[tuple[IntakeRecord, datetime]]) -> float:
    timestamps = sorted((record.timestamp for record, _ in dated), reverse=True)
    intervals = [
        (newer - older) / MS_PER_HOUR
        for newer, older in zip(timestamps, timestamps[1:], strict=False)
        if (newer - older) / MS_PER_HOUR <= MAX_INTERVAL_HOURS
    ]
    if not intervals:
        return 0.0
    return sum(intervals) / len(intervals)


def _longest_streak(days: list[date]) -> int:
    longest = 1
    current = 1
    for previous, day in zip(days, days[1:], strict=False):
        if day - previous == timedelta(days=1):
            current += 1
        else:
            longest = max(longest, current)
            current = 1
    return max(longest, current)


def _current_streak(days: list[date], today: date) -> int:
    present = set(days)
    streak = 0
    day = today
    while day in present:
        streak += 1
        day -= timedelta(days=1)
    return streak
