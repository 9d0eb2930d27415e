"""Supabase repository for logged food observations."""

from dataclasses import dataclass
from datetime import date, time, timedelta
from uuid import UUID

from supabase import Client

from food_suggestions.domain.foods import FoodProfile, HistoricalObservation, MealSlot
from food_suggestions.services.observations import ObservationRepository

_ENTRY_COLUMNS = (
    "id, custom_food_id, meal_type_id, date, time, "
    "custom_foods(id, food_name, amount, unit_id, calories, protein_g, carbs_g, "
    "fat_g, fiber_g, sodium_mg, fitbit_food_id, keywords)"
)


@dataclass
class SupabaseObservationRepository(ObservationRepository):
    """Supabase implementation over food log entries joined with custom foods."""

    client: Client

    def fetch_observations(
        self, user_id: UUID, reference_date: date, lookback_days: int
    ) -> list[HistoricalObservation]:
        """Return log entries dated within the lookback window."""
        start = reference_date - timedelta(days=lookback_days)
        response = (
            self.client.table("food_log_entries")
            .select(_ENTRY_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", reference_date.isoformat())
            .order("date", desc=True)
            .order("id")
            .execute()
        )
        return [_parse_observation(row) for row in response.data or []]

    def search_observations(
        self, user_id: UUID, keywords: list[str]
    ) -> list[HistoricalObservation]:
        """Return log entries for foods matching every keyword."""
        keyword_response = (
            self.client.table("custom_foods")
            .select("id")
            .eq("user_id", str(user_id))
            .contains("keywords", keywords)
            .execute()
        )
        food_ids = {row["id"] for row in keyword_response.data or []}

        name_query = (
            self.client.table("custom_foods").select("id").eq("user_id", str(user_id))
        )
        for keyword in keywords:
            name_query = name_query.ilike("food_name", f"%{_escape_like(keyword)}%")
        name_response = name_query.execute()
        food_ids.update(row["id"] for row in name_response.data or [])

        if not food_ids:
            return []
        response = (
            self.client.table("food_log_entries")
            .select(_ENTRY_COLUMNS)
            .eq("user_id", str(user_id))
            .in_("custom_food_id", sorted(food_ids))
            .order("id")
            .execute()
        )
        return [_parse_observation(row) for row in response.data or []]


def _parse_observation(row: dict[str, object]) -> HistoricalObservation:
    """Parse a joined log entry row into a domain model."""
    food_row = row.get("custom_foods")
    if not isinstance(food_row, dict):
        raise RuntimeError(f"Log entry {row.get('id')} has no food definition")
    raw_time = row.get("time")
    return HistoricalObservation(
        entry_id=int(row["id"]),
        food_id=UUID(str(row["custom_food_id"])),
        observed_on=date.fromisoformat(str(row["date"])),
        observed_at=(
            time.fromisoformat(raw_time)
            if isinstance(raw_time, str) and raw_time
            else None
        ),
        meal_slot=MealSlot.from_id(row.get("meal_type_id")),
        food=_parse_food(food_row),
    )


def _parse_food(row: dict[str, object]) -> FoodProfile:
    external_ref = row.get("fitbit_food_id")
    keywords = row.get("keywords") or []
    return FoodProfile(
        name=str(row.get("food_name", "")),
        amount=float(row.get("amount", 0.0)),
        unit_id=int(row.get("unit_id", 0)),
        calories=float(row.get("calories", 0.0)),
        protein_g=float(row.get("protein_g", 0.0)),
        carbs_g=float(row.get("carbs_g", 0.0)),
        fat_g=float(row.get("fat_g", 0.0)),
        fiber_g=float(row.get("fiber_g", 0.0)),
        sodium_mg=float(row.get("sodium_mg", 0.0)),
        external_ref=int(external_ref) if external_ref is not None else None,
        keywords=tuple(str(keyword).lower() for keyword in keywords),
    )


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so keywords match literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
