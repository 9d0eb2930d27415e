"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from food_suggestions.adapters.supabase_observation_repository import (
    SupabaseObservationRepository,
)
from food_suggestions.config import Settings
from food_suggestions.services.ranking import ContextRankingService
from food_suggestions.services.recent import RecentFoodsService
from food_suggestions.services.scoring import ScoringParams
from food_suggestions.services.search import FoodSearchService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    ranking_service: ContextRankingService
    search_service: FoodSearchService
    recent_service: RecentFoodsService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    repository = SupabaseObservationRepository(supabase_client)
    params = ScoringParams(
        time_sigma_minutes=resolved_settings.time_sigma_minutes,
        recency_half_life_days=resolved_settings.recency_half_life_days,
        weekday_boost=resolved_settings.weekday_boost,
    )
    ranking_service = ContextRankingService(
        repository=repository,
        params=params,
        lookback_days=resolved_settings.lookback_days,
        max_limit=resolved_settings.max_page_limit,
    )
    search_service = FoodSearchService(
        repository=repository,
        max_limit=resolved_settings.max_page_limit,
    )
    recent_service = RecentFoodsService(
        repository=repository,
        lookback_days=resolved_settings.lookback_days,
        max_limit=resolved_settings.max_page_limit,
    )

    return AppContainer(
        settings=resolved_settings,
        ranking_service=ranking_service,
        search_service=search_service,
        recent_service=recent_service,
    )
