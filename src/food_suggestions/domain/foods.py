"""Domain models for ranked food suggestions."""

from dataclasses import dataclass
from datetime import date, time
from enum import Enum
from uuid import UUID


class MealSlot(Enum):
    """Meal slot tags, keyed by the fitness platform's meal type ids."""

    BREAKFAST = 1
    MORNING_SNACK = 2
    LUNCH = 3
    AFTERNOON_SNACK = 4
    DINNER = 5
    ANYTIME = 7

    @classmethod
    def from_id(cls, value: object) -> "MealSlot":
        """Return the slot for a stored meal type id, defaulting to anytime."""
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return cls.ANYTIME


@dataclass(frozen=True)
class FoodProfile:
    """Nutrition profile of a reusable food definition."""

    name: str
    amount: float
    unit_id: int
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float
    sodium_mg: float
    external_ref: int | None = None
    keywords: tuple[str, ...] = ()

    @property
    def is_synced(self) -> bool:
        """Whether the food was synchronized to the fitness platform."""
        return self.external_ref is not None


@dataclass(frozen=True)
class HistoricalObservation:
    """One past instance of a food being logged."""

    entry_id: int
    food_id: UUID
    observed_on: date
    observed_at: time | None
    meal_slot: MealSlot
    food: FoodProfile


@dataclass(frozen=True)
class ScoredObservation:
    """Observation annotated with its contextual score."""

    observation: HistoricalObservation
    score: float


@dataclass(frozen=True)
class RankedFood:
    """Aggregated ranking unit returned to callers."""

    food_id: UUID
    food: FoodProfile
    meal_slot: MealSlot
    total_score: float


@dataclass(frozen=True)
class RankedPage:
    """One page of ranked foods."""

    items: list[RankedFood]
    next_cursor: str | None


@dataclass(frozen=True)
class RecentFood:
    """A food with the date and time it was last logged."""

    food_id: UUID
    food: FoodProfile
    meal_slot: MealSlot
    last_logged_on: date
    last_logged_at: time | None


@dataclass(frozen=True)
class RecentPage:
    """One page of recently logged foods."""

    items: list[RecentFood]
    next_cursor: str | None
