"""FastAPI application factory."""

import logging
from typing import Any
from zoneinfo import ZoneInfo

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder

from caffeine_tracker.api.models import (
    DistributionRequest,
    IntakeAmountRequest,
    MetabolismRequest,
    SnapshotRequest,
    StatisticsRequest,
)
from caffeine_tracker.app_logging import configure_logging
from caffeine_tracker.config import InvalidTimezoneError, resolve_timezone
from caffeine_tracker.containers import AppContainer
from caffeine_tracker.domain.parameters import InvalidParametersError, UserParameters
from caffeine_tracker.domain.stats import StatsView
from caffeine_tracker.services.dosing import compute_intake_amount
from caffeine_tracker.services.metabolism import generate_series
from caffeine_tracker.services.records import (
    backup_to_payload,
    parse_backup,
    parse_drink_spec,
    parse_records,
)
from caffeine_tracker.services.stats import StatsService
from caffeine_tracker.services.status import StatusService


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    def resolve_context(
        request: Request, payload: SnapshotRequest
    ) -> tuple[UserParameters, ZoneInfo, int]:
        state_container: AppContainer = request.app.state.container
        try:
            parameters = (
                payload.settings.to_parameters(state_container.parameters)
                if payload.settings
                else state_container.parameters
            )
            tz = (
                resolve_timezone(payload.timezone)
                if payload.timezone
                else state_container.timezone
            )
        except (InvalidParametersError, InvalidTimezoneError) as exc:
            logger.info("Rejected request settings: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
            ) from exc
        now = payload.now if payload.now is not None else state_container.clock()
        return parameters, tz, now

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/status")
    async def current_status(
        payload: SnapshotRequest, request: Request
    ) -> dict[str, Any]:
        """Return the caffeine level, concentration and safe-sleep estimate."""
        parameters, tz, now = resolve_context(request, payload)
        records = parse_records(payload.records)
        snapshot = StatusService(parameters).get_status(records, now, tz)
        return {"status": jsonable_encoder(snapshot)}

    @app.post("/metabolism")
    async def metabolism(
        payload: MetabolismRequest, request: Request
    ) -> dict[str, Any]:
        """Return the sampled decay curve around ``now``."""
        parameters, _, now = resolve_context(request, payload)
        settings = request.app.state.container.settings
        series = generate_series(
            parse_records(payload.records),
            parameters.half_life_hours,
            now,
            hours_before=_or_default(
                payload.hours_before, settings.chart_hours_before
            ),
            hours_after=_or_default(payload.hours_after, settings.chart_hours_after),
            points_per_hour=_or_default(
                payload.points_per_hour, settings.chart_points_per_hour
            ),
        )
        return {"series": jsonable_encoder(series)}

    @app.post("/statistics/day")
    async def day_statistics(
        payload: StatisticsRequest, request: Request
    ) -> dict[str, Any]:
        """Return the total and hourly breakdown of one day."""
        parameters, tz, now = resolve_context(request, payload)
        anchor = payload.anchor if payload.anchor is not None else now
        summary = StatsService(parameters).get_day(
            parse_records(payload.records), anchor, tz
        )
        return {"summary": jsonable_encoder(summary)}

    @app.post("/statistics/{view}")
    async def period_statistics(
        view: StatsView, payload: StatisticsRequest, request: Request
    ) -> dict[str, Any]:
        """Return bucket totals and summary statistics for a week, month or year."""
        parameters, tz, now = resolve_context(request, payload)
        anchor = payload.anchor if payload.anchor is not None else now
        service = StatsService(parameters)
        summary = service.get_period(parse_records(payload.records), view, anchor, tz)
        return {
            "summary": jsonable_encoder(summary),
            "next_period_disabled": service.is_next_period_disabled(
                view, anchor, now, tz
            ),
        }

    @app.post("/distribution")
    async def distribution(
        payload: DistributionRequest, request: Request
    ) -> dict[str, Any]:
        """Return intake grouped by drink or label."""
        parameters, _, _ = resolve_context(request, payload)
        sources = StatsService(parameters).get_distribution(
            parse_records(payload.records), payload.sort_by, payload.drink_names
        )
        return {"sources": jsonable_encoder(sources)}

    @app.post("/insights")
    async def insights(payload: SnapshotRequest, request: Request) -> dict[str, Any]:
        """Return long-run intake habits."""
        parameters, tz, now = resolve_context(request, payload)
        result = StatsService(parameters).get_insights(
            parse_records(payload.records), now, tz
        )
        return {"insights": jsonable_encoder(result)}

    @app.post("/intake-amount")
    async def intake_amount(payload: IntakeAmountRequest) -> dict[str, int]:
        """Return whole milligrams of caffeine for a serving of a drink."""
        drink_spec = parse_drink_spec(payload.drink)
        return {"amount": compute_intake_amount(drink_spec, payload.input_value)}

    @app.post("/backup/normalize")
    async def normalize_backup(payload: dict[str, Any]) -> dict[str, Any]:
        """Return a backup with invalid records removed."""
        snapshot = parse_backup(payload)
        raw_records = payload.get("records")
        received = len(raw_records) if isinstance(raw_records, list) else 0
        dropped = received - len(snapshot.records)
        if dropped > 0:
            logger.info("Dropped invalid records from backup: count=%s", dropped)
        return {"backup": backup_to_payload(snapshot), "dropped": max(dropped, 0)}

    return app


def _or_default(value: float | None, default: float) -> float:
    return default if value is None else value
