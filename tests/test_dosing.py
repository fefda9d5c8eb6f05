"""Tests for the intake amount calculator."""

import math

from caffeine_tracker.domain.intake import CalculationMode, DrinkSpec
from caffeine_tracker.services.dosing import compute_intake_amount


def test_per_100ml_scales_by_volume() -> None:
    espresso = DrinkSpec(caffeine_content=212)

    assert compute_intake_amount(espresso, 30) == 64
    assert compute_intake_amount(DrinkSpec(caffeine_content=40), 250) == 100


def test_per_gram_rounds_half_up() -> None:
    beans = DrinkSpec(calculation_mode=CalculationMode.PER_GRAM, caffeine_per_gram=0.5)

    assert compute_intake_amount(beans, 15) == 8
    assert compute_intake_amount(beans, 14) == 7


def test_missing_concentration_yields_zero() -> None:
    assert compute_intake_amount(DrinkSpec(), 250) == 0
    per_gram = DrinkSpec(calculation_mode=CalculationMode.PER_GRAM)
    assert compute_intake_amount(per_gram, 10) == 0
    assert compute_intake_amount(DrinkSpec(caffeine_content=-5), 250) == 0


def test_invalid_input_value_yields_zero() -> None:
    coffee = DrinkSpec(caffeine_content=40)

    assert compute_intake_amount(coffee, 0) == 0
    assert compute_intake_amount(coffee, -100) == 0
    assert compute_intake_amount(coffee, math.nan) == 0
    assert compute_intake_amount(coffee, None) == 0
    assert compute_intake_amount(None, 250) == 0
