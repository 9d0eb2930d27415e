"""Food suggestion endpoints with simple token auth."""

from __future__ import annotations

from datetime import date, datetime, time  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from food_suggestions.api.models import (
    RankedFoodsResponse,
    SearchFoodsResponse,
    ranked_payload,
    recent_payload,
)

if TYPE_CHECKING:
    from food_suggestions.containers import AppContainer

router = APIRouter(prefix="/users/{user_id}", tags=["foods"])


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get(
    "/common-foods",
    dependencies=[Depends(require_api_token)],
    response_model=RankedFoodsResponse,
)
async def common_foods(  # noqa: PLR0913
    user_id: UUID,
    request: Request,
    limit: int | None = None,
    cursor: str | None = None,
    client_date: date | None = None,
    client_time: time | None = None,
    include_unsynced: bool | None = None,
) -> RankedFoodsResponse:
    """Return foods ranked for the client's current date and time."""
    container: AppContainer = request.app.state.container
    settings = container.settings
    now = _now(settings.default_timezone)
    page = container.ranking_service.rank_by_context(
        user_id,
        client_date or now.date(),
        client_time or now.time().replace(microsecond=0),
        limit=_resolve_limit(limit, settings.default_page_limit),
        cursor=cursor,
        include_unsynced=_resolve_unsynced(include_unsynced, container),
    )
    return RankedFoodsResponse(
        foods=[ranked_payload(item) for item in page.items],
        next_cursor=page.next_cursor,
    )


@router.get(
    "/recent-foods",
    dependencies=[Depends(require_api_token)],
    response_model=RankedFoodsResponse,
)
async def recent_foods(  # noqa: PLR0913
    user_id: UUID,
    request: Request,
    limit: int | None = None,
    cursor: str | None = None,
    client_date: date | None = None,
    include_unsynced: bool | None = None,
) -> RankedFoodsResponse:
    """Return distinct foods, most recently logged first."""
    container: AppContainer = request.app.state.container
    settings = container.settings
    page = container.recent_service.list_recent(
        user_id,
        client_date or _now(settings.default_timezone).date(),
        limit=_resolve_limit(limit, settings.default_page_limit),
        cursor=cursor,
        include_unsynced=_resolve_unsynced(include_unsynced, container),
    )
    return RankedFoodsResponse(
        foods=[recent_payload(item) for item in page.items],
        next_cursor=page.next_cursor,
    )


@router.get(
    "/search-foods",
    dependencies=[Depends(require_api_token)],
    response_model=SearchFoodsResponse,
)
async def search_foods(
    user_id: UUID,
    request: Request,
    q: str = "",
    limit: int | None = None,
    include_unsynced: bool | None = None,
) -> SearchFoodsResponse:
    """Return logged foods matching every keyword in ``q``."""
    container: AppContainer = request.app.state.container
    foods = container.search_service.rank_by_query(
        user_id,
        q,
        limit=_resolve_limit(limit, container.settings.default_page_limit),
        include_unsynced=_resolve_unsynced(include_unsynced, container),
    )
    return SearchFoodsResponse(foods=[ranked_payload(item) for item in foods])


def _now(timezone_name: str) -> datetime:
    return datetime.now(tz=ZoneInfo(timezone_name))


def _resolve_unsynced(value: bool | None, container: AppContainer) -> bool:
    if value is None:
        return container.settings.include_unsynced_foods
    return value


def _resolve_limit(value: int | None, default: int) -> int:
    return default if value is None else value
