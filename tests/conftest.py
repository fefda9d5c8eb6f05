"""Shared test fixtures."""

from datetime import UTC, datetime
from itertools import count
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from caffeine_tracker.api.app import create_app
from caffeine_tracker.config import Settings
from caffeine_tracker.containers import AppContainer, build_container
from caffeine_tracker.domain.intake import IntakeRecord
from caffeine_tracker.domain.parameters import UserParameters
from caffeine_tracker.services.calendar import to_epoch_ms

_record_ids = count(1)


def at(  # noqa: PLR0913
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    tz: ZoneInfo | None = None,
) -> int:
    """Epoch milliseconds of a wall-clock time, UTC unless ``tz`` is given."""
    return to_epoch_ms(datetime(year, month, day, hour, minute, tzinfo=tz or UTC))


# Wednesday, 2024-01-10 12:00 UTC.
NOW = at(2024, 1, 10, 12)


def make_record(amount: float, timestamp: float, **fields) -> IntakeRecord:
    return IntakeRecord(
        id=fields.pop("id", next(_record_ids)),
        amount=amount,
        timestamp=timestamp,
        **fields,
    )


def record_payload(amount: float, timestamp: int, **fields) -> dict[str, object]:
    return {"id": next(_record_ids), "amount": amount, "timestamp": timestamp, **fields}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        timezone="UTC",
        half_life_hours=4.0,
        weight_kg=60.0,
        volume_of_distribution_l_per_kg=0.6,
        safe_sleep_threshold_concentration=1.5,
        max_daily_caffeine_mg=400.0,
        recommended_dose_per_kg=5.0,
        chart_hours_before=6,
        chart_hours_after=18,
        chart_points_per_hour=4,
    )


@pytest.fixture
def parameters(settings: Settings) -> UserParameters:
    return UserParameters.from_settings(settings)


@pytest.fixture
def utc() -> ZoneInfo:
    return ZoneInfo("UTC")


@pytest.fixture
def berlin() -> ZoneInfo:
    return ZoneInfo("Europe/Berlin")


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    return build_container(settings, clock=lambda: NOW)


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))
