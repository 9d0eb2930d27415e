"""Total ordering and keyset page slicing."""

from collections.abc import Callable, Sequence
from datetime import date, time
from typing import TypeVar
from uuid import UUID

from food_suggestions.domain.cursors import PageCursor, RecentCursor
from food_suggestions.domain.errors import InvalidParametersError
from food_suggestions.domain.foods import RankedFood, RecentFood
from food_suggestions.services.kernels import minutes_since_midnight

T = TypeVar("T")
K = TypeVar("K")


def ranked_sort_key(item: RankedFood) -> tuple[float, UUID]:
    """Score descending, then food id ascending."""
    return (-item.total_score, item.food_id)


def ranked_cursor_key(cursor: PageCursor) -> tuple[float, UUID]:
    return (-cursor.score, cursor.food_id)


def recent_sort_key(item: RecentFood) -> tuple[int, float, UUID]:
    """Date descending, time descending with unknown times last, then id."""
    return _recent_key(item.last_logged_on, item.last_logged_at, item.food_id)


def recent_cursor_key(cursor: RecentCursor) -> tuple[int, float, UUID]:
    return _recent_key(cursor.last_date, cursor.last_time, cursor.last_food_id)


def validate_limit(limit: int, max_limit: int | None = None) -> None:
    """Reject non-positive or oversized page sizes."""
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise InvalidParametersError("limit must be a positive integer")
    if max_limit is not None and limit > max_limit:
        raise InvalidParametersError(f"limit must not exceed {max_limit}")


def paginate(
    items: Sequence[T],
    key: Callable[[T], K],
    after: K | None,
    limit: int,
) -> tuple[list[T], T | None]:
    """Sort ``items`` by ``key`` and return the page strictly after ``after``.

    The second element is the item to build the next cursor from, or ``None``
    when no items remain beyond the page.
    """
    ordered = sorted(items, key=key)
    if after is not None:
        ordered = [item for item in ordered if key(item) > after]
    page = ordered[:limit]
    if len(ordered) > limit:
        return page, page[-1]
    return page, None


def _recent_key(
    logged_on: date, logged_at: time | None, food_id: UUID
) -> tuple[int, float, UUID]:
    minutes = minutes_since_midnight(logged_at) if logged_at is not None else -1.0
    return (-logged_on.toordinal(), -minutes, food_id)
