"""Aggregation of scored observations into ranked foods."""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, time
from uuid import UUID

from food_suggestions.domain.foods import (
    HistoricalObservation,
    RankedFood,
    ScoredObservation,
)
from food_suggestions.services.scoring import ScoringParams, score_observation


def filter_synced(
    observations: Iterable[HistoricalObservation], include_unsynced: bool
) -> list[HistoricalObservation]:
    """Drop foods never synced to the fitness platform unless permissive."""
    if include_unsynced:
        return list(observations)
    return [obs for obs in observations if obs.food.is_synced]


def score_all(
    observations: Iterable[HistoricalObservation],
    reference_date: date,
    reference_time: time,
    params: ScoringParams | None = None,
) -> list[ScoredObservation]:
    """Score every observation independently."""
    return [
        ScoredObservation(
            observation=obs,
            score=score_observation(obs, reference_date, reference_time, params),
        )
        for obs in observations
    ]


@dataclass
class _FoodAccumulator:
    """Member scores and best observation for one food."""

    best: ScoredObservation
    scores: list[float] = field(default_factory=list)

    def add(self, scored: ScoredObservation) -> None:
        self.scores.append(scored.score)
        if _best_key(scored) > _best_key(self.best):
            self.best = scored

    def to_ranked(self) -> RankedFood:
        observation = self.best.observation
        return RankedFood(
            food_id=observation.food_id,
            food=observation.food,
            meal_slot=observation.meal_slot,
            total_score=math.fsum(self.scores),
        )


def aggregate(scored: Iterable[ScoredObservation]) -> list[RankedFood]:
    """Group scored observations by food, summing scores.

    Totals use ``math.fsum`` so they do not depend on row order. The meal slot
    and profile come from the single highest-scoring observation; equal scores
    favour the more recent observation.
    """
    groups: dict[UUID, _FoodAccumulator] = {}
    for item in scored:
        food_id = item.observation.food_id
        accumulator = groups.get(food_id)
        if accumulator is None:
            accumulator = groups[food_id] = _FoodAccumulator(best=item)
        accumulator.add(item)
    return [accumulator.to_ranked() for accumulator in groups.values()]


def rank_observations(
    observations: Iterable[HistoricalObservation],
    reference_date: date,
    reference_time: time,
    *,
    include_unsynced: bool = False,
    params: ScoringParams | None = None,
) -> list[RankedFood]:
    """Filter, score and aggregate observations into unsorted ranked foods."""
    candidates = filter_synced(observations, include_unsynced)
    return aggregate(score_all(candidates, reference_date, reference_time, params))


def _best_key(scored: ScoredObservation) -> tuple[float, date, time, int]:
    observation = scored.observation
    return (
        scored.score,
        observation.observed_on,
        observation.observed_at or time.min,
        observation.entry_id,
    )
