"""Domain models for caffeine intake."""

from dataclasses import dataclass
from enum import Enum

MANUAL_ENTRY_KEY = "custom-manual-entry"


class CalculationMode(Enum):
    """How a drink's caffeine content is expressed."""

    PER_100ML = "per100ml"
    PER_GRAM = "perGram"


@dataclass(frozen=True)
class IntakeRecord:
    """A single caffeine intake event."""

    id: str | int | float | None
    amount: float
    timestamp: float
    volume: float | None = None
    drink_id: str | None = None
    name: str | None = None
    custom_name: str | None = None


@dataclass(frozen=True)
class DrinkSpec:
    """Caffeine concentration of a drink, per 100 ml or per gram."""

    calculation_mode: CalculationMode = CalculationMode.PER_100ML
    caffeine_content: float | None = None
    caffeine_per_gram: float | None = None


@dataclass(frozen=True)
class ByDrink:
    """Intake attributed to a catalog drink."""

    drink_id: str


@dataclass(frozen=True)
class ByLabel:
    """Intake attributed to a free-text label."""

    text: str

    @property
    def is_manual(self) -> bool:
        return self.text == MANUAL_ENTRY_KEY


Source = ByDrink | ByLabel


def resolve_source(record: IntakeRecord) -> Source:
    """Return the grouping source for a record."""
    if record.drink_id:
        return ByDrink(record.drink_id)
    return ByLabel(record.custom_name or record.name or MANUAL_ENTRY_KEY)
