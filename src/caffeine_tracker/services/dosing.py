"""Caffeine amount of a serving from a drink's concentration."""

from caffeine_tracker.domain.intake import CalculationMode, DrinkSpec
from caffeine_tracker.numbers import is_finite_number, round_half_up


def compute_intake_amount(drink_spec: DrinkSpec | None, input_value: float) -> int:
    """Return whole milligrams of caffeine for ``input_value`` ml or grams."""
    if drink_spec is None or not is_finite_number(input_value) or input_value <= 0:
        return 0

    if drink_spec.calculation_mode is CalculationMode.PER_GRAM:
        per_gram = drink_spec.caffeine_per_gram
        if not is_finite_number(per_gram) or per_gram < 0:
            return 0
        return round_half_up(per_gram * input_value)

    content = drink_spec.caffeine_content
    if not is_finite_number(content) or content < 0:
        return 0
    return round_half_up(content * input_value / 100)
