"""User pharmacokinetic parameters."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from caffeine_tracker.numbers import is_finite_number

if TYPE_CHECKING:
    from caffeine_tracker.config import Settings


class InvalidParametersError(ValueError):
    """Raised when user parameters are out of range."""

    def __init__(self, field: str, value: object, rule: str) -> None:
        super().__init__(f"{field} must be {rule}, got {value!r}")
        self.field = field
        self.value = value


@dataclass(frozen=True)
class UserParameters:
    """Validated inputs for decay and concentration estimates.

    Construction is the only validation path: every field is checked in
    ``__post_init__`` and an ``InvalidParametersError`` names the first bad one.
    """

    half_life_hours: float
    weight_kg: float
    volume_of_distribution_l_per_kg: float
    safe_sleep_threshold_concentration: float
    max_daily_caffeine_mg: float = 400.0
    recommended_dose_per_kg: float = 5.0

    def __post_init__(self) -> None:
        _require_positive("half_life_hours", self.half_life_hours)
        _require_positive("weight_kg", self.weight_kg)
        _require_positive(
            "volume_of_distribution_l_per_kg", self.volume_of_distribution_l_per_kg
        )
        _require_non_negative(
            "safe_sleep_threshold_concentration",
            self.safe_sleep_threshold_concentration,
        )
        _require_positive("max_daily_caffeine_mg", self.max_daily_caffeine_mg)
        _require_positive("recommended_dose_per_kg", self.recommended_dose_per_kg)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "UserParameters":
        """Build parameters from application settings."""
        return cls(
            half_life_hours=settings.half_life_hours,
            weight_kg=settings.weight_kg,
            volume_of_distribution_l_per_kg=settings.volume_of_distribution_l_per_kg,
            safe_sleep_threshold_concentration=(
                settings.safe_sleep_threshold_concentration
            ),
            max_daily_caffeine_mg=settings.max_daily_caffeine_mg,
            recommended_dose_per_kg=settings.recommended_dose_per_kg,
        )

    @property
    def effective_max_daily_mg(self) -> float:
        """Daily limit capped by the weight-based recommendation."""
        return min(
            self.max_daily_caffeine_mg, self.weight_kg * self.recommended_dose_per_kg
        )


def _require_positive(field: str, value: object) -> None:
    if not is_finite_number(value) or value <= 0:
        raise InvalidParametersError(field, value, "a finite number > 0")


def _require_non_negative(field: str, value: object) -> None:
    if not is_finite_number(value) or value < 0:
        raise InvalidParametersError(field, value, "a finite number >= 0")
