"""Pydantic response models for the food suggestion API."""

from datetime import date, time
from uuid import UUID

from pydantic import BaseModel

from food_suggestions.domain.foods import FoodProfile, MealSlot, RankedFood, RecentFood


class FoodPayload(BaseModel):
    """Food profile with its ranking context."""

    food_id: UUID
    food_name: str
    amount: float
    unit_id: int
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float
    sodium_mg: float
    fitbit_food_id: int | None = None
    meal_type_id: int
    meal_slot: str
    score: float | None = None
    last_logged_on: date | None = None
    last_logged_at: time | None = None


class RankedFoodsResponse(BaseModel):
    """A page of foods with an optional continuation cursor."""

    foods: list[FoodPayload]
    next_cursor: str | None = None


class SearchFoodsResponse(BaseModel):
    """Keyword search results."""

    foods: list[FoodPayload]


def ranked_payload(item: RankedFood) -> FoodPayload:
    """Convert a ranked food into its API payload."""
    return _payload(item.food_id, item.food, item.meal_slot, score=item.total_score)


def recent_payload(item: RecentFood) -> FoodPayload:
    """Convert a recent food into its API payload."""
    payload = _payload(item.food_id, item.food, item.meal_slot)
    payload.last_logged_on = item.last_logged_on
    payload.last_logged_at = item.last_logged_at
    return payload


def _payload(
    food_id: UUID,
    food: FoodProfile,
    meal_slot: MealSlot,
    score: float | None = None,
) -> FoodPayload:
    return FoodPayload(
        food_id=food_id,
        food_name=food.name,
        amount=food.amount,
        unit_id=food.unit_id,
        calories=food.calories,
        protein_g=food.protein_g,
        carbs_g=food.carbs_g,
        fat_g=food.fat_g,
        fiber_g=food.fiber_g,
        sodium_mg=food.sodium_mg,
        fitbit_food_id=food.external_ref,
        meal_type_id=meal_slot.value,
        meal_slot=meal_slot.name.lower(),
        score=score,
    )
