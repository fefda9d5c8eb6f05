"""Dependency container wiring for the application."""

import time
from collections.abc import Callable
from dataclasses import dataclass
from zoneinfo import ZoneInfo

from caffeine_tracker.config import Settings, resolve_timezone
from caffeine_tracker.domain.parameters import UserParameters
from caffeine_tracker.services.stats import StatsService
from caffeine_tracker.services.status import StatusService


def system_clock() -> int:
    """Return the current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    parameters: UserParameters
    timezone: ZoneInfo
    clock: Callable[[], int]
    stats_service: StatsService
    status_service: StatusService


def build_container(
    settings: Settings | None = None, clock: Callable[[], int] | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    parameters = UserParameters.from_settings(resolved_settings)
    return AppContainer(
        settings=resolved_settings,
        parameters=parameters,
        timezone=resolve_timezone(resolved_settings.timezone),
        clock=clock or system_clock,
        stats_service=StatsService(parameters),
        status_service=StatusService(parameters),
    )
