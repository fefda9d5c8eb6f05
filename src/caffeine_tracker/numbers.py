"""Numeric helpers shared by the calculators."""

import math


def is_finite_number(value: object) -> bool:
    """Return True for real, finite numbers (booleans excluded)."""
    return (
        isinstance(value, int | float)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    if not math.isfinite(value):
        return 0
    return math.floor(value + 0.5)


def round_half_up_tenth(value: float) -> float:
    """Round to one decimal place, halves going up."""
    if not math.isfinite(value):
        return 0.0
    return math.floor(value * 10 + 0.5) / 10
