"""Tests for numeric helpers."""

import math

from caffeine_tracker.numbers import (
    is_finite_number,
    round_half_up,
    round_half_up_tenth,
)


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(2.49) == 2
    assert round_half_up(math.nan) == 0


def test_round_half_up_tenth() -> None:
    assert round_half_up_tenth(0.25) == 0.3
    assert round_half_up_tenth(0.24) == 0.2
    assert round_half_up_tenth(136.568) == 136.6
    assert round_half_up_tenth(math.inf) == 0


def test_is_finite_number() -> None:
    assert is_finite_number(3)
    assert is_finite_number(0.5)
    assert not is_finite_number(True)
    assert not is_finite_number("3")
    assert not is_finite_number(math.nan)
