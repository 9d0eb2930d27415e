"""Access to a user's logged food observations."""

import logging
from collections.abc import Callable
from datetime import date
from typing import Protocol
from uuid import UUID

from food_suggestions.domain.errors import (
    InvalidParametersError,
    UpstreamFetchFailedError,
)
from food_suggestions.domain.foods import HistoricalObservation

_logger = logging.getLogger(__name__)

MAX_LOOKBACK_DAYS = 366


class ObservationRepository(Protocol):
    """Read-only interface over logged food entries."""

    def fetch_observations(
        self, user_id: UUID, reference_date: date, lookback_days: int
    ) -> list[HistoricalObservation]:
        """Return observations dated within the lookback window, inclusive."""

    def search_observations(
        self, user_id: UUID, keywords: list[str]
    ) -> list[HistoricalObservation]:
        """Return all observations of foods matching every keyword."""


def validate_lookback(lookback_days: int) -> None:
    """Reject lookback windows outside ``[0, MAX_LOOKBACK_DAYS]``."""
    if (
        isinstance(lookback_days, bool)
        or not isinstance(lookback_days, int)
        or not 0 <= lookback_days <= MAX_LOOKBACK_DAYS
    ):
        raise InvalidParametersError(
            f"lookback_days must be between 0 and {MAX_LOOKBACK_DAYS}"
        )


def fetch_guarded(
    func: Callable[[], list[HistoricalObservation]], *, action: str
) -> list[HistoricalObservation]:
    """Run a repository query, surfacing failures as ``UpstreamFetchFailedError``."""
    try:
        return func()
    except Exception as exc:
        _logger.exception("Observation %s failed", action)
        raise UpstreamFetchFailedError(f"Observation {action} failed") from exc
