"""Per-observation contextual scoring."""

from dataclasses import dataclass
from datetime import date, time

from food_suggestions.domain.foods import HistoricalObservation
from food_suggestions.services.kernels import (
    DEFAULT_RECENCY_HALF_LIFE_DAYS,
    DEFAULT_TIME_SIGMA_MINUTES,
    DEFAULT_WEEKDAY_BOOST,
    circular_time_distance,
    days_between,
    recency_decay,
    time_kernel,
    weekday_boost,
)


@dataclass(frozen=True)
class ScoringParams:
    """Tunable constants for the scoring kernel."""

    time_sigma_minutes: float = DEFAULT_TIME_SIGMA_MINUTES
    recency_half_life_days: float = DEFAULT_RECENCY_HALF_LIFE_DAYS
    weekday_boost: float = DEFAULT_WEEKDAY_BOOST


def score_observation(
    observation: HistoricalObservation,
    reference_date: date,
    reference_time: time,
    params: ScoringParams | None = None,
) -> float:
    """Score how well a past observation matches the reference moment."""
    resolved = params or ScoringParams()
    distance = circular_time_distance(observation.observed_at, reference_time)
    return (
        time_kernel(distance, resolved.time_sigma_minutes)
        * recency_decay(
            days_between(observation.observed_on, reference_date),
            resolved.recency_half_life_days,
        )
        * weekday_boost(
            observation.observed_on, reference_date, resolved.weekday_boost
        )
    )
