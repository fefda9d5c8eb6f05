"""Calendar totals and source breakdowns of intake records."""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, timedelta
from zoneinfo import ZoneInfo

from caffeine_tracker.domain.intake import ByDrink, IntakeRecord, Source, resolve_source
from caffeine_tracker.domain.stats import BucketTotal, SortBy, SourceShare
from caffeine_tracker.numbers import round_half_up
from caffeine_tracker.services import calendar
from caffeine_tracker.services.decay import valid_records

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_LABELS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)
UNKNOWN_DRINK_NAME = "Unknown drink"
MANUAL_ENTRY_NAME = "Custom intake"


def total_in_range(
    records: Iterable[IntakeRecord | None], range_start: float, range_end: float
) -> float:
    """Sum valid amounts with ``range_start <= timestamp <= range_end``."""
    return sum(
        (
            record.amount
            for record in valid_records(records)
            if range_start <= record.timestamp <= range_end
        ),
        0.0,
    )


def daily_totals_for_week(
    records: Iterable[IntakeRecord | None], anchor: float, tz: ZoneInfo
) -> list[BucketTotal]:
    """Return seven daily totals, Monday first, for the week of ``anchor``."""
    records = valid_records(records)
    monday = calendar.week_start_date(anchor, tz)
    return [
        _day_bucket(records, monday + timedelta(days=offset), label, tz)
        for offset, label in enumerate(WEEKDAY_LABELS)
    ]


def daily_totals_for_month(
    records: Iterable[IntakeRecord | None], anchor: float, tz: ZoneInfo
) -> list[BucketTotal]:
    """Return one total per calendar day of the month of ``anchor``."""
    records = valid_records(records)
    first = calendar.local_date(anchor, tz).replace(day=1)
    days = calendar.days_in_month(first.year, first.month)
    return [
        _day_bucket(records, first.replace(day=number), str(number), tz)
        for number in range(1, days + 1)
    ]


def monthly_totals_for_year(
    records: Iterable[IntakeRecord | None], anchor: float, tz: ZoneInfo
) -> list[BucketTotal]:
    """Return twelve monthly totals for the year of ``anchor``."""
    records = valid_records(records)
    year = calendar.local_date(anchor, tz).year
    buckets = []
    for month in range(1, 13):
        first = date(year, month, 1)
        last = first.replace(day=calendar.days_in_month(year, month))
        start = calendar.day_bounds(first, tz)[0]
        end = calendar.day_bounds(last, tz)[1]
        buckets.append(
            BucketTotal(
                label=MONTH_LABELS[month - 1],
                value=total_in_range(records, start, end),
                date=first,
                start=start,
                end=end,
            )
        )
    return buckets


def hourly_totals_for_day(
    records: Iterable[IntakeRecord | None], anchor: float, tz: ZoneInfo
) -> list[float]:
    """Return 24 totals by local hour for the day of ``anchor``."""
    start = calendar.start_of_day(anchor, tz)
    end = calendar.end_of_day(anchor, tz)
    hourly = [0.0] * 24
    for record in valid_records(records):
        if start <= record.timestamp <= end:
            hour = calendar.to_datetime(record.timestamp, tz).hour
            hourly[hour] += record.amount
    return hourly


@dataclass
class _SourceGroup:
    display_name: str
    amount: float = 0.0
    count: int = 0


def source_distribution(
    records: Iterable[IntakeRecord | None],
    sort_by: SortBy,
    drink_names: Mapping[str, str] | None = None,
) -> list[SourceShare]:
    """Group intake by drink or label and rank by ``sort_by``.

    Percentages are whole numbers that always sum to exactly 100.
    """
    groups: dict[Source, _SourceGroup] = {}
    total_amount = 0.0
    total_count = 0
    for record in valid_records(records):
        if record.amount <= 0:
            continue
        source = resolve_source(record)
        group = groups.get(source)
        if group is None:
            name = _display_name(source, record, drink_names)
            group = _SourceGroup(display_name=name)
            groups[source] = group
        group.amount += record.amount
        group.count += 1
        total_amount += record.amount
        total_count += 1

    if total_amount <= 0 or total_count == 0:
        return []

    if sort_by is SortBy.COUNT:
        ranked = sorted(groups.items(), key=lambda item: item[1].count, reverse=True)
        raw = [group.count / total_count * 100 for _, group in ranked]
    else:
        ranked = sorted(groups.items(), key=lambda item: item[1].amount, reverse=True)
        raw = [group.amount / total_amount * 100 for _, group in ranked]

    percentages = _whole_percentages(raw)
    return [
        SourceShare(
            key=_source_key(source),
            display_name=group.display_name,
            amount=group.amount,
            count=group.count,
            percentage=percentage,
        )
        for (source, group), percentage in zip(ranked, percentages, strict=True)
    ]


def _day_bucket(
    records: list[IntakeRecord], day: date, label: str, tz: ZoneInfo
) -> BucketTotal:
    start, end = calendar.day_bounds(day, tz)
    return BucketTotal(
        label=label,
        value=total_in_range(records, start, end),
        date=day,
        start=start,
        end=end,
    )


def _whole_percentages(raw: list[float]) -> list[int]:
    """Round shares so they sum to 100, the residual going to the last one."""
    if not raw:
        return []
    head = [round_half_up(value) for value in raw[:-1]]
    if sum(head) > 100:
        head = [math.floor(value) for value in raw[:-1]]
    return [*head, 100 - sum(head)]


def _source_key(source: Source) -> str:
    if isinstance(source, ByDrink):
        return source.drink_id
    return source.text


def _display_name(
    source: Source, record: IntakeRecord, drink_names: Mapping[str, str] | None
) -> str:
    if isinstance(source, ByDrink):
        catalog_name = (drink_names or {}).get(source.drink_id)
        return catalog_name or record.custom_name or record.name or UNKNOWN_DRINK_NAME
    if source.is_manual:
        return MANUAL_ENTRY_NAME
    return source.text
