"""First-order caffeine elimination.

Remaining amount after ``t`` hours follows the half-life law

    M(t) = M0 * 0.5 ** (t / t_half)

and the time to fall from ``C`` to ``T`` is its inverse

    t = t_half * log2(C / T)
"""

import math
from collections.abc import Iterable

from caffeine_tracker.domain.intake import IntakeRecord
from caffeine_tracker.numbers import is_finite_number

MS_PER_HOUR = 60 * 60 * 1000
TARGET_EPSILON_MG = 0.1


def is_valid_record(record: object) -> bool:
    """Return True when a record can take part in calculations."""
    if record is None:
        return False
    amount = getattr(record, "amount", None)
    timestamp = getattr(record, "timestamp", None)
    return is_finite_number(amount) and amount >= 0 and is_finite_number(timestamp)


def valid_records(records: Iterable[IntakeRecord | None]) -> list[IntakeRecord]:
    """Drop records that fail validation."""
    return [record for record in records if is_valid_record(record)]


def remaining_amount(
    initial_amount: float,
    intake_time: float,
    at_time: float,
    half_life_hours: float,
) -> float:
    """Return the amount of one intake left in the body at ``at_time``."""
    if at_time < intake_time or half_life_hours <= 0 or initial_amount <= 0:
        return 0.0
    hours_elapsed = (at_time - intake_time) / MS_PER_HOUR
    remaining = initial_amount * math.pow(0.5, hours_elapsed / half_life_hours)
    return max(0.0, remaining)


def total_at_time(
    records: Iterable[IntakeRecord | None], at_time: float, half_life_hours: float
) -> float:
    """Return the summed remaining amount of all valid records."""
    total = 0.0
    for record in valid_records(records):
        total += remaining_amount(
            record.amount, record.timestamp, at_time, half_life_hours
        )
    return total


def hours_to_reach_target(
    current_amount: float, target_amount: float, half_life_hours: float
) -> float | None:
    """Return hours until ``current_amount`` decays to ``target_amount``.

    ``0`` means no wait is needed (or the inputs are degenerate); ``None`` means
    there is no finite answer.
    """
    if current_amount <= target_amount or target_amount < 0 or half_life_hours <= 0:
        return 0.0
    effective_target = max(target_amount, TARGET_EPSILON_MG)
    try:
        hours_needed = half_life_hours * math.log2(current_amount / effective_target)
    except (ValueError, OverflowError):
        return None
    if not math.isfinite(hours_needed) or hours_needed < 0:
        return None
    return hours_needed
