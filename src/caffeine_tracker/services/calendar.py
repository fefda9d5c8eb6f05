"""Calendar bucket boundaries in a given time zone.

All functions take and return epoch milliseconds. Ends are inclusive, one
millisecond before the next bucket starts; weeks start on Monday.
"""

import calendar
from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo

DECEMBER = 12
_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MS = timedelta(milliseconds=1)


def to_datetime(instant_ms: float, tz: ZoneInfo) -> datetime:
    """Convert epoch milliseconds to an aware local datetime."""
    return (_EPOCH + timedelta(milliseconds=instant_ms)).astimezone(tz)


def to_epoch_ms(moment: datetime) -> int:
    """Convert an aware datetime to whole epoch milliseconds."""
    return (moment - _EPOCH) // _ONE_MS


def local_date(instant_ms: float, tz: ZoneInfo) -> date:
    """Return the local calendar date of an instant."""
    return to_datetime(instant_ms, tz).date()


def day_bounds(day: date, tz: ZoneInfo) -> tuple[int, int]:
    """Return the first and last millisecond of a local calendar day.

    The day ends one millisecond before the next day starts, so an hour
    repeated by a DST fall-back at midnight stays inside its own day.
    """
    start = datetime.combine(day, time.min, tzinfo=tz)
    next_start = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return to_epoch_ms(start), to_epoch_ms(next_start) - 1


def start_of_day(instant_ms: float, tz: ZoneInfo) -> int:
    return day_bounds(local_date(instant_ms, tz), tz)[0]


def end_of_day(instant_ms: float, tz: ZoneInfo) -> int:
    return day_bounds(local_date(instant_ms, tz), tz)[1]


def week_start_date(instant_ms: float, tz: ZoneInfo) -> date:
    """Return the Monday of the week containing the instant."""
    day = local_date(instant_ms, tz)
    return day - timedelta(days=day.weekday())


def start_of_week(instant_ms: float, tz: ZoneInfo) -> int:
    return day_bounds(week_start_date(instant_ms, tz), tz)[0]


def end_of_week(instant_ms: float, tz: ZoneInfo) -> int:
    sunday = week_start_date(instant_ms, tz) + timedelta(days=6)
    return day_bounds(sunday, tz)[1]


def start_of_month(instant_ms: float, tz: ZoneInfo) -> int:
    day = local_date(instant_ms, tz)
    return day_bounds(day.replace(day=1), tz)[0]


def end_of_month(instant_ms: float, tz: ZoneInfo) -> int:
    day = local_date(instant_ms, tz)
    return day_bounds(day.replace(day=days_in_month(day.year, day.month)), tz)[1]


def start_of_year(instant_ms: float, tz: ZoneInfo) -> int:
    day = local_date(instant_ms, tz)
    return day_bounds(date(day.year, 1, 1), tz)[0]


def end_of_year(instant_ms: float, tz: ZoneInfo) -> int:
    day = local_date(instant_ms, tz)
    return day_bounds(date(day.year, DECEMBER, 31), tz)[1]


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in a month, leap years included."""
    return calendar.monthrange(year, month)[1]


def add_months(day: date, months: int) -> date:
    """Shift a date by whole months, pinned to the first of the month."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)
