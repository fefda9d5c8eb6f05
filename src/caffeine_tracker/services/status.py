"""Current caffeine status and safe-sleep estimate."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from zoneinfo import ZoneInfo

from caffeine_tracker.domain.intake import IntakeRecord
from caffeine_tracker.domain.parameters import UserParameters
from caffeine_tracker.domain.status import AdviceKind, CaffeineStatus, LevelStatus
from caffeine_tracker.services import calendar
from caffeine_tracker.services.aggregation import daily_totals_for_week, total_in_range
from caffeine_tracker.services.concentration import (
    amount_to_concentration,
    concentration_to_amount,
)
from caffeine_tracker.services.decay import (
    MS_PER_HOUR,
    hours_to_reach_target,
    total_at_time,
    valid_records,
)

VERY_LOW_SHARE = 0.1
LOW_SHARE = 0.5
WEEKLY_AVERAGE_SHARE = 0.9
EVENING_HOUR = 16
EVENING_AMOUNT_MG = 100

_logger = logging.getLogger(__name__)


@dataclass
class StatusService:
    """Service computing the live caffeine status for a user."""

    parameters: UserParameters

    def get_status(
        self, records: Sequence[IntakeRecord | None], now: int, tz: ZoneInfo
    ) -> CaffeineStatus:
        """Return the caffeine status at ``now`` in the user's timezone."""
        records = valid_records(records)
        params = self.parameters
        current = total_at_time(records, now, params.half_life_hours)
        concentration = amount_to_concentration(
            current, params.weight_kg, params.volume_of_distribution_l_per_kg
        )
        target, hours, sleep_at = self.estimate_safe_sleep(current, now)
        today_total = total_in_range(
            records, calendar.start_of_day(now, tz), calendar.end_of_day(now, tz)
        )
        return CaffeineStatus(
            now=now,
            current_amount=current,
            concentration=concentration,
            target_amount=target,
            hours_until_safe_sleep=hours,
            safe_sleep_at=sleep_at,
            today_total=today_total,
            percent_filled=self.percent_filled(current),
            level=self.level_for(current),
            advice=self.advice_for(records, current, today_total, now, tz),
        )

    def estimate_safe_sleep(
        self, current_amount: float, now: int
    ) -> tuple[float | None, float | None, int | None]:
        """Return target amount, hours to reach it, and the resulting instant."""
        params = self.parameters
        target = concentration_to_amount(
            params.safe_sleep_threshold_concentration,
            params.weight_kg,
            params.volume_of_distribution_l_per_kg,
        )
        if target is None:
            _logger.debug("Safe-sleep target not computable: params=%s", params)
            return None, None, None
        hours = hours_to_reach_target(current_amount, target, params.half_life_hours)
        if hours is None:
            _logger.debug(
                "No finite safe-sleep time: current=%s target=%s",
                current_amount,
                target,
            )
            return target, None, None
        return target, hours, now + round(hours * MS_PER_HOUR)

    def percent_filled(self, current_amount: float) -> float:
        """Return the current amount as a 0-100 share of the daily maximum."""
        share = current_amount / self.parameters.max_daily_caffeine_mg * 100
        return min(max(0.0, share), 100.0)

    def level_for(self, current_amount: float) -> LevelStatus:
        """Classify the current amount against the daily maximum."""
        max_daily = self.parameters.max_daily_caffeine_mg
        if current_amount < max_daily * VERY_LOW_SHARE:
            return LevelStatus.VERY_LOW
        if current_amount < max_daily * LOW_SHARE:
            return LevelStatus.LOW
        if current_amount < max_daily:
            return LevelStatus.MODERATE
        return LevelStatus.HIGH

    def advice_for(  # noqa: PLR0913
        self,
        records: Sequence[IntakeRecord],
        current_amount: float,
        today_total: float,
        now: int,
        tz: ZoneInfo,
    ) -> AdviceKind:
        """Pick health advice from recent intake."""
        max_daily = self.parameters.max_daily_caffeine_mg
        if today_total > max_daily:
            return AdviceKind.DAILY_LIMIT_EXCEEDED
        week = daily_totals_for_week(records, now, tz)
        weekly_average = sum(bucket.value for bucket in week) / len(week)
        if weekly_average > max_daily * WEEKLY_AVERAGE_SHARE:
            return AdviceKind.WEEKLY_AVERAGE_HIGH
        local_hour = calendar.to_datetime(now, tz).hour
        if current_amount > EVENING_AMOUNT_MG and local_hour >= EVENING_HOUR:
            return AdviceKind.EVENING_CAFFEINE
        return AdviceKind.HEALTHY
