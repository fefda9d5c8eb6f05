"""Tests for settings, timezones and user parameters."""

import math

import pytest

from caffeine_tracker.config import InvalidTimezoneError, Settings, resolve_timezone
from caffeine_tracker.domain.parameters import InvalidParametersError, UserParameters


def test_parameters_from_settings(settings: Settings) -> None:
    parameters = UserParameters.from_settings(settings)

    assert parameters.half_life_hours == 4.0
    assert parameters.weight_kg == 60.0
    assert parameters.max_daily_caffeine_mg == 400.0


def test_effective_daily_limit_is_capped_by_weight() -> None:
    light = UserParameters(4, 50, 0.6, 1.5, max_daily_caffeine_mg=400)
    heavy = UserParameters(4, 100, 0.6, 1.5, max_daily_caffeine_mg=400)

    assert light.effective_max_daily_mg == 250
    assert heavy.effective_max_daily_mg == 400


def test_parameters_reject_out_of_range_values() -> None:
    with pytest.raises(InvalidParametersError) as exc_info:
        UserParameters(4, 0, 0.6, 1.5)
    assert exc_info.value.field == "weight_kg"

    with pytest.raises(InvalidParametersError):
        UserParameters(math.nan, 60, 0.6, 1.5)
    with pytest.raises(InvalidParametersError):
        UserParameters(4, 60, 0.6, -0.1)
    with pytest.raises(ValueError):
        UserParameters(4, 60, 0, 1.5)


def test_from_settings_validates_values(settings: Settings) -> None:
    broken = settings.model_copy(update={"half_life_hours": -1})

    with pytest.raises(InvalidParametersError):
        UserParameters.from_settings(broken)


def test_resolve_timezone() -> None:
    assert resolve_timezone(" Europe/Berlin ").key == "Europe/Berlin"

    with pytest.raises(InvalidTimezoneError):
        resolve_timezone("Mars/Olympus_Mons")
    with pytest.raises(InvalidTimezoneError):
        resolve_timezone("")
    with pytest.raises(InvalidTimezoneError):
        resolve_timezone(None)
