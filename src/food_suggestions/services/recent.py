"""Most recently logged distinct foods."""

from dataclasses import dataclass
from datetime import date, time
from uuid import UUID

from food_suggestions.domain.cursors import RecentCursor
from food_suggestions.domain.foods import HistoricalObservation, RecentFood, RecentPage
from food_suggestions.services.aggregation import filter_synced
from food_suggestions.services.observations import (
    ObservationRepository,
    fetch_guarded,
    validate_lookback,
)
from food_suggestions.services.pagination import (
    paginate,
    recent_cursor_key,
    recent_sort_key,
    validate_limit,
)


@dataclass
class RecentFoodsService:
    """Lists a user's foods by when they were last logged."""

    repository: ObservationRepository
    lookback_days: int = 90
    max_limit: int = 50

    def list_recent(  # noqa: PLR0913
        self,
        user_id: UUID,
        reference_date: date,
        *,
        limit: int = 10,
        cursor: str | None = None,
        include_unsynced: bool = False,
    ) -> RecentPage:
        """Return one page of distinct foods, most recently logged first."""
        validate_limit(limit, self.max_limit)
        validate_lookback(self.lookback_days)
        after = RecentCursor.decode(cursor) if cursor is not None else None
        observations = fetch_guarded(
            lambda: self.repository.fetch_observations(
                user_id, reference_date, self.lookback_days
            ),
            action="fetch",
        )

        latest: dict[UUID, HistoricalObservation] = {}
        for observation in filter_synced(observations, include_unsynced):
            current = latest.get(observation.food_id)
            if current is None or _logged_key(observation) > _logged_key(current):
                latest[observation.food_id] = observation

        foods = [
            RecentFood(
                food_id=obs.food_id,
                food=obs.food,
                meal_slot=obs.meal_slot,
                last_logged_on=obs.observed_on,
                last_logged_at=obs.observed_at,
            )
            for obs in latest.values()
        ]
        page, last = paginate(
            foods,
            key=recent_sort_key,
            after=recent_cursor_key(after) if after else None,
            limit=limit,
        )
        next_cursor = (
            RecentCursor(
                last_date=last.last_logged_on,
                last_time=last.last_logged_at,
                last_food_id=last.food_id,
            ).encode()
            if last
            else None
        )
        return RecentPage(items=page, next_cursor=next_cursor)


def _logged_key(
    observation: HistoricalObservation,
) -> tuple[date, time, bool, int]:
    return (
        observation.observed_on,
        observation.observed_at or time.min,
        observation.observed_at is not None,
        observation.entry_id,
    )
