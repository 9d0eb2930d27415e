"""Contextual ranking of previously logged foods."""

import logging
from dataclasses import dataclass, field
from datetime import date, time
from uuid import UUID

from food_suggestions.domain.cursors import PageCursor
from food_suggestions.domain.foods import RankedPage
from food_suggestions.services.aggregation import rank_observations
from food_suggestions.services.observations import (
    ObservationRepository,
    fetch_guarded,
    validate_lookback,
)
from food_suggestions.services.pagination import (
    paginate,
    ranked_cursor_key,
    ranked_sort_key,
    validate_limit,
)
from food_suggestions.services.scoring import ScoringParams

_logger = logging.getLogger(__name__)


@dataclass
class ContextRankingService:
    """Ranks foods by how likely they are to be eaten at a given moment."""

    repository: ObservationRepository
    params: ScoringParams = field(default_factory=ScoringParams)
    lookback_days: int = 90
    max_limit: int = 50

    def rank_by_context(  # noqa: PLR0913
        self,
        user_id: UUID,
        reference_date: date,
        reference_time: time,
        *,
        limit: int = 10,
        cursor: str | None = None,
        include_unsynced: bool = False,
    ) -> RankedPage:
        """Return one page of foods ranked for the reference date and time."""
        validate_limit(limit, self.max_limit)
        validate_lookback(self.lookback_days)
        after = PageCursor.decode(cursor) if cursor is not None else None

        observations = fetch_guarded(
            lambda: self.repository.fetch_observations(
                user_id, reference_date, self.lookback_days
            ),
            action="fetch",
        )
        ranked = rank_observations(
            observations,
            reference_date,
            reference_time,
            include_unsynced=include_unsynced,
            params=self.params,
        )
        page, last = paginate(
            ranked,
            key=ranked_sort_key,
            after=ranked_cursor_key(after) if after else None,
            limit=limit,
        )
        next_cursor = (
            PageCursor(score=last.total_score, food_id=last.food_id).encode()
            if last
            else None
        )
        _logger.debug(
            "Ranked foods: user=%s observations=%s foods=%s page=%s",
            user_id,
            len(observations),
            len(ranked),
            len(page),
        )
        return RankedPage(items=page, next_cursor=next_cursor)
