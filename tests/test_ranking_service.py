"""Tests for the contextual ranking service."""

from datetime import time, timedelta
from uuid import UUID, uuid4

import pytest

from food_suggestions.domain.errors import (
    InvalidCursorError,
    InvalidParametersError,
    UpstreamFetchFailedError,
)
from food_suggestions.services.ranking import ContextRankingService
from tests.conftest import (
    REFERENCE_DATE,
    InMemoryObservationRepository,
    make_food,
    make_observation,
)

MORNING = time(8, 0)


def test_rank_by_context_orders_repeated_food_first(
    repository: InMemoryObservationRepository,
) -> None:
    user_id = uuid4()
    food_a = uuid4()
    food_b = uuid4()
    repository.add(
        user_id,
        *[
            make_observation(food_a, observed_on=REFERENCE_DATE - timedelta(days=day))
            for day in range(7)
        ],
        make_observation(food_b),
    )
    service = ContextRankingService(repository)

    page = service.rank_by_context(user_id, REFERENCE_DATE, MORNING)

    assert [item.food_id for item in page.items] == [food_a, food_b]
    assert page.next_cursor is None


def test_rank_by_context_pages_through_ties(
    repository: InMemoryObservationRepository,
) -> None:
    user_id = uuid4()
    for food_id in (30, 10, 20):
        repository.add(user_id, make_observation(UUID(int=food_id)))
    service = ContextRankingService(repository)

    first = service.rank_by_context(user_id, REFERENCE_DATE, MORNING, limit=2)
    second = service.rank_by_context(
        user_id, REFERENCE_DATE, MORNING, limit=2, cursor=first.next_cursor
    )

    assert [item.food_id.int for item in first.items] == [10, 20]
    assert first.next_cursor is not None
    assert [item.food_id.int for item in second.items] == [30]
    assert second.next_cursor is None


def test_rank_by_context_pages_match_full_ranking(
    repository: InMemoryObservationRepository,
) -> None:
    user_id = uuid4()
    times = [time(8, 0), time(8, 0), time(8, 0), time(12, 0), time(8, 0), time(20, 0)]
    for index, observed_at in enumerate(times):
        repository.add(
            user_id, make_observation(UUID(int=index + 1), observed_at=observed_at)
        )
    service = ContextRankingService(repository)
    full = service.rank_by_context(user_id, REFERENCE_DATE, MORNING, limit=50)

    collected = []
    cursor = None
    while True:
        page = service.rank_by_context(
            user_id, REFERENCE_DATE, MORNING, limit=2, cursor=cursor
        )
        collected.extend(page.items)
        cursor = page.next_cursor
        if cursor is None:
            break

    assert collected == full.items
    assert len(collected) == len(times)


class AlternatingOrderRepository(InMemoryObservationRepository):
    """Returns rows reversed on every other fetch."""

    def fetch_observations(self, user_id, reference_date, lookback_days):
        rows = super().fetch_observations(user_id, reference_date, lookback_days)
        if len(self.fetch_calls) % 2 == 0:
            rows.reverse()
        return rows


def test_rank_by_context_pages_are_stable_across_row_order() -> None:
    repository = AlternatingOrderRepository()
    user_id = uuid4()
    slots = [
        (REFERENCE_DATE - timedelta(days=days), observed_at)
        for days, observed_at in [
            (0, time(7, 10)),
            (3, time(9, 40)),
            (8, time(12, 5)),
            (15, time(6, 55)),
            (29, time(21, 30)),
        ]
    ]
    for observed_on, observed_at in slots:
        for food_id in (3, 1, 2):
            repository.add(
                user_id,
                make_observation(
                    UUID(int=food_id), observed_on=observed_on, observed_at=observed_at
                ),
            )
    service = ContextRankingService(repository)

    collected = []
    cursor = None
    while True:
        page = service.rank_by_context(
            user_id, REFERENCE_DATE, MORNING, limit=1, cursor=cursor
        )
        collected.extend(page.items)
        cursor = page.next_cursor
        if cursor is None:
            break

    assert [item.food_id.int for item in collected] == [1, 2, 3]


def test_rank_by_context_empty_history(
    repository: InMemoryObservationRepository,
) -> None:
    service = ContextRankingService(repository)

    page = service.rank_by_context(uuid4(), REFERENCE_DATE, MORNING)

    assert page.items == []
    assert page.next_cursor is None


def test_rank_by_context_uses_lookback_window(
    repository: InMemoryObservationRepository,
) -> None:
    user_id = uuid4()
    service = ContextRankingService(repository, lookback_days=30)

    service.rank_by_context(user_id, REFERENCE_DATE, MORNING)

    assert repository.fetch_calls == [(user_id, REFERENCE_DATE, 30)]


def test_rank_by_context_filters_unsynced_by_default(
    repository: InMemoryObservationRepository,
) -> None:
    user_id = uuid4()
    synced = uuid4()
    unsynced = uuid4()
    repository.add(
        user_id,
        make_observation(synced),
        make_observation(unsynced, food=make_food("Local", external_ref=None)),
    )
    service = ContextRankingService(repository)

    strict = service.rank_by_context(user_id, REFERENCE_DATE, MORNING)
    permissive = service.rank_by_context(
        user_id, REFERENCE_DATE, MORNING, include_unsynced=True
    )

    assert [item.food_id for item in strict.items] == [synced]
    assert {item.food_id for item in permissive.items} == {synced, unsynced}


def test_rank_by_context_rejects_invalid_cursor(
    repository: InMemoryObservationRepository,
) -> None:
    service = ContextRankingService(repository)

    with pytest.raises(InvalidCursorError):
        service.rank_by_context(uuid4(), REFERENCE_DATE, MORNING, cursor="garbage")
    assert repository.fetch_calls == []


@pytest.mark.parametrize("limit", [0, -5, 51])
def test_rank_by_context_rejects_invalid_limit(
    repository: InMemoryObservationRepository, limit: int
) -> None:
    service = ContextRankingService(repository)

    with pytest.raises(InvalidParametersError):
        service.rank_by_context(uuid4(), REFERENCE_DATE, MORNING, limit=limit)


def test_rank_by_context_rejects_invalid_lookback(
    repository: InMemoryObservationRepository,
) -> None:
    service = ContextRankingService(repository, lookback_days=-1)

    with pytest.raises(InvalidParametersError):
        service.rank_by_context(uuid4(), REFERENCE_DATE, MORNING)


def test_rank_by_context_surfaces_upstream_failure(
    repository: InMemoryObservationRepository,
) -> None:
    failure = ConnectionError("database unavailable")
    repository.error = failure
    service = ContextRankingService(repository)

    with pytest.raises(UpstreamFetchFailedError) as exc_info:
        service.rank_by_context(uuid4(), REFERENCE_DATE, MORNING)

    assert exc_info.value.__cause__ is failure
