"""Conversion between wire payloads and intake domain models.

Malformed records are skipped, never raised.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from caffeine_tracker.domain.intake import CalculationMode, DrinkSpec, IntakeRecord
from caffeine_tracker.numbers import is_finite_number
from caffeine_tracker.services.decay import is_valid_record

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackupSnapshot:
    """Exported application data: records, settings and drinks."""

    records: list[IntakeRecord]
    user_settings: dict[str, object] = field(default_factory=dict)
    drinks: list[dict[str, object]] = field(default_factory=list)
    export_timestamp: int | None = None
    version: str | None = None


def parse_record(raw: object) -> IntakeRecord | None:
    """Build a record from a payload dict, or None when it is unusable."""
    if not isinstance(raw, Mapping):
        return None
    record_id = raw.get("id")
    if not isinstance(record_id, str) and not is_finite_number(record_id):
        record_id = None
    record = IntakeRecord(
        id=record_id,
        amount=raw.get("amount"),
        timestamp=raw.get("timestamp"),
        volume=raw.get("volume") if is_finite_number(raw.get("volume")) else None,
        drink_id=_optional_text(raw.get("drinkId")),
        name=_optional_text(raw.get("name")),
        custom_name=_optional_text(raw.get("customName")),
    )
    if not is_valid_record(record):
        return None
    return record


def parse_records(raw_records: Iterable[object] | None) -> list[IntakeRecord]:
    """Parse a list of record payloads, dropping invalid entries."""
    records = []
    skipped = 0
    for raw in raw_records or []:
        record = parse_record(raw)
        if record is None:
            skipped += 1
            continue
        records.append(record)
    if skipped:
        _logger.debug("Skipped invalid intake records: count=%s", skipped)
    return records


def record_to_payload(record: IntakeRecord) -> dict[str, object]:
    """Serialize a record to the external camelCase shape."""
    payload: dict[str, object] = {
        "id": record.id,
        "amount": record.amount,
        "timestamp": record.timestamp,
    }
    optional = {
        "volume": record.volume,
        "drinkId": record.drink_id,
        "name": record.name,
        "customName": record.custom_name,
    }
    payload.update({key: value for key, value in optional.items() if value is not None})
    return payload


def parse_drink_spec(raw: object) -> DrinkSpec | None:
    """Build a drink spec from a payload dict, or None when unusable."""
    if not isinstance(raw, Mapping):
        return None
    try:
        mode = CalculationMode(raw.get("calculationMode") or "per100ml")
    except ValueError:
        return None
    return DrinkSpec(
        calculation_mode=mode,
        caffeine_content=_optional_number(raw.get("caffeineContent")),
        caffeine_per_gram=_optional_number(raw.get("caffeinePerGram")),
    )


def parse_backup(payload: Mapping[str, object]) -> BackupSnapshot:
    """Read an exported backup, keeping only valid records."""
    raw_records = payload.get("records")
    user_settings = payload.get("userSettings")
    raw_drinks = payload.get("drinks")
    export_timestamp = payload.get("exportTimestamp")
    version = payload.get("version")

    drinks = []
    if isinstance(raw_drinks, list):
        drinks = [dict(drink) for drink in raw_drinks if isinstance(drink, Mapping)]
    if not isinstance(user_settings, Mapping):
        user_settings = {}
    export_timestamp = (
        int(export_timestamp) if is_finite_number(export_timestamp) else None
    )

    return BackupSnapshot(
        records=parse_records(raw_records if isinstance(raw_records, list) else []),
        user_settings=dict(user_settings),
        drinks=drinks,
        export_timestamp=export_timestamp,
        version=str(version) if version is not None else None,
    )


def backup_to_payload(snapshot: BackupSnapshot) -> dict[str, object]:
    """Serialize a backup snapshot to the external shape."""
    return {
        "records": [record_to_payload(record) for record in snapshot.records],
        "userSettings": dict(snapshot.user_settings),
        "drinks": [dict(drink) for drink in snapshot.drinks],
        "exportTimestamp": snapshot.export_timestamp,
        "version": snapshot.version,
    }


def _optional_text(value: object) -> str | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str | int):
        text = str(value)
        return text or None
    return None


def _optional_number(value: object) -> float | None:
    return value if is_finite_number(value) else None
