"""Amount and plasma concentration conversions.

Uses a linear volume of distribution: ``C = amount / (Vd * weight)``.
"""

import math

from caffeine_tracker.numbers import is_finite_number


def amount_to_concentration(
    amount_mg: float, weight_kg: float, vd_l_per_kg: float
) -> float | None:
    """Return estimated concentration in mg/L, or None when not computable."""
    total_volume_l = _distribution_volume(amount_mg, weight_kg, vd_l_per_kg)
    if total_volume_l is None:
        return None
    return amount_mg / total_volume_l


def concentration_to_amount(
    concentration_mg_l: float, weight_kg: float, vd_l_per_kg: float
) -> float | None:
    """Return the amount in mg matching a concentration, or None."""
    total_volume_l = _distribution_volume(concentration_mg_l, weight_kg, vd_l_per_kg)
    if total_volume_l is None:
        return None
    return concentration_mg_l * total_volume_l


def _distribution_volume(
    quantity: float, weight_kg: float, vd_l_per_kg: float
) -> float | None:
    """Return ``Vd * weight`` in litres when all inputs are usable."""
    values = (quantity, weight_kg, vd_l_per_kg)
    if not all(is_finite_number(value) for value in values):
        return None
    if quantity < 0 or weight_kg <= 0 or vd_l_per_kg <= 0:
        return None
    total_volume_l = vd_l_per_kg * weight_kg
    if not math.isfinite(total_volume_l) or total_volume_l <= 0:
        return None
    return total_volume_l
