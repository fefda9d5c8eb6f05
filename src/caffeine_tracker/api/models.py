"""Pydantic models for API request payloads."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from caffeine_tracker.domain.parameters import UserParameters
from caffeine_tracker.domain.stats import SortBy


class ParametersPayload(BaseModel):
    """User settings relevant to the caffeine model."""

    model_config = ConfigDict(populate_by_name=True)

    weight_kg: float = Field(alias="weightKg")
    half_life_hours: float = Field(alias="halfLifeHours")
    volume_of_distribution_l_per_kg: float = Field(alias="volumeOfDistributionLPerKg")
    safe_sleep_threshold_concentration: float = Field(
        alias="safeSleepThresholdConcentration"
    )
    max_daily_caffeine_mg: float | None = Field(default=None, alias="maxDailyCaffeine")
    recommended_dose_per_kg: float | None = Field(
        default=None, alias="recommendedDosePerKg"
    )

    def to_parameters(self, defaults: UserParameters) -> UserParameters:
        """Build validated parameters, taking optional limits from ``defaults``."""
        return UserParameters(
            half_life_hours=self.half_life_hours,
            weight_kg=self.weight_kg,
            volume_of_distribution_l_per_kg=self.volume_of_distribution_l_per_kg,
            safe_sleep_threshold_concentration=self.safe_sleep_threshold_concentration,
            max_daily_caffeine_mg=self.max_daily_caffeine_mg
            if self.max_daily_caffeine_mg is not None
            else defaults.max_daily_caffeine_mg,
            recommended_dose_per_kg=self.recommended_dose_per_kg
            if self.recommended_dose_per_kg is not None
            else defaults.recommended_dose_per_kg,
        )


class SnapshotRequest(BaseModel):
    """Record snapshot posted by the client, with optional overrides."""

    model_config = ConfigDict(populate_by_name=True)

    records: list[Any] = Field(default_factory=list)
    now: int | None = None
    timezone: str | None = None
    settings: ParametersPayload | None = None


class MetabolismRequest(SnapshotRequest):
    """Snapshot plus the chart sampling window."""

    hours_before: float | None = Field(default=None, alias="hoursBefore")
    hours_after: float | None = Field(default=None, alias="hoursAfter")
    points_per_hour: int | None = Field(default=None, alias="pointsPerHour")


class StatisticsRequest(SnapshotRequest):
    """Snapshot plus the instant whose period is shown."""

    anchor: int | None = None


class DistributionRequest(SnapshotRequest):
    """Snapshot plus ranking options for the source breakdown."""

    sort_by: SortBy = Field(default=SortBy.AMOUNT, alias="sortBy")
    drink_names: dict[str, str] = Field(default_factory=dict, alias="drinkNames")


class IntakeAmountRequest(BaseModel):
    """Drink spec and serving size for an intake amount."""

    model_config = ConfigDict(populate_by_name=True)

    drink: dict[str, Any]
    input_value: float | None = Field(default=None, alias="inputValue")
