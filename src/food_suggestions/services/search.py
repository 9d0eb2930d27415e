"""Keyword search over a user's logged foods."""

import logging
from dataclasses import dataclass
from datetime import date, time
from uuid import UUID

from food_suggestions.domain.errors import InvalidParametersError
from food_suggestions.domain.foods import HistoricalObservation, RankedFood
from food_suggestions.services.aggregation import filter_synced
from food_suggestions.services.kernels import minutes_since_midnight
from food_suggestions.services.observations import (
    ObservationRepository,
    fetch_guarded,
)
from food_suggestions.services.pagination import validate_limit

_logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


@dataclass
class _SearchHit:
    count: int
    latest: HistoricalObservation

    def add(self, observation: HistoricalObservation) -> None:
        self.count += 1
        if _logged_key(observation) > _logged_key(self.latest):
            self.latest = observation


@dataclass
class FoodSearchService:
    """Ranks keyword matches by how often and how recently they were logged."""

    repository: ObservationRepository
    max_limit: int = 50

    def rank_by_query(
        self,
        user_id: UUID,
        query_text: str,
        *,
        limit: int = 10,
        include_unsynced: bool = False,
    ) -> list[RankedFood]:
        """Return foods matching every keyword, most frequently logged first."""
        validate_limit(limit, self.max_limit)
        keywords = parse_keywords(query_text)
        observations = fetch_guarded(
            lambda: self.repository.search_observations(user_id, keywords),
            action="search",
        )
        hits: dict[UUID, _SearchHit] = {}
        for observation in filter_synced(observations, include_unsynced):
            hit = hits.get(observation.food_id)
            if hit is None:
                hits[observation.food_id] = _SearchHit(count=1, latest=observation)
            else:
                hit.add(observation)

        ordered = sorted(hits.values(), key=_hit_sort_key)
        _logger.debug(
            "Food search: user=%s keywords=%s matches=%s",
            user_id,
            keywords,
            len(ordered),
        )
        return [
            RankedFood(
                food_id=hit.latest.food_id,
                food=hit.latest.food,
                meal_slot=hit.latest.meal_slot,
                total_score=float(hit.count),
            )
            for hit in ordered[:limit]
        ]


def parse_keywords(query_text: str | None) -> list[str]:
    """Split a query into lowercase keywords."""
    cleaned = (query_text or "").strip()
    if len(cleaned) < MIN_QUERY_LENGTH:
        raise InvalidParametersError(
            f"Query must be at least {MIN_QUERY_LENGTH} characters"
        )
    keywords = cleaned.lower().split()
    if not keywords:
        raise InvalidParametersError("Query must contain at least one word")
    return keywords


def _logged_key(observation: HistoricalObservation) -> tuple[date, time, int]:
    return (
        observation.observed_on,
        observation.observed_at or time.min,
        observation.entry_id,
    )


def _hit_sort_key(hit: _SearchHit) -> tuple[int, int, float, UUID]:
    latest = hit.latest
    return (
        -hit.count,
        -latest.observed_on.toordinal(),
        -minutes_since_midnight(latest.observed_at),
        latest.food_id,
    )
