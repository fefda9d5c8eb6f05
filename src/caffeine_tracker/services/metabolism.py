"""Sampled decay curve for the metabolism chart."""

import math
from collections.abc import Iterable

from caffeine_tracker.domain.intake import IntakeRecord
from caffeine_tracker.domain.stats import SeriesPoint
from caffeine_tracker.numbers import is_finite_number, round_half_up_tenth
from caffeine_tracker.services.decay import MS_PER_HOUR, total_at_time, valid_records


def generate_series(  # noqa: PLR0913
    records: Iterable[IntakeRecord | None],
    half_life_hours: float,
    now: float,
    hours_before: float = 6,
    hours_after: float = 18,
    points_per_hour: int = 4,
) -> list[SeriesPoint]:
    """Sample the total caffeine level around ``now``.

    Points are spaced ``60 / points_per_hour`` minutes apart, from
    ``now - hours_before`` to ``now + hours_after`` inclusive.
    """
    if not all(
        is_finite_number(value)
        for value in (now, hours_before, hours_after, points_per_hour)
    ):
        return []
    if points_per_hour <= 0 or hours_before < 0 or hours_after < 0:
        return []

    records = valid_records(records)
    start = now - hours_before * MS_PER_HOUR
    end = now + hours_after * MS_PER_HOUR
    interval = MS_PER_HOUR / points_per_hour
    # Tolerance keeps the end point when the window is an exact multiple.
    steps = math.floor((end - start) / interval + 1e-9)

    series = []
    for index in range(steps + 1):
        time = round(start + index * interval)
        level = total_at_time(records, time, half_life_hours)
        series.append(SeriesPoint(time=time, caffeine=round_half_up_tenth(level)))
    return series
