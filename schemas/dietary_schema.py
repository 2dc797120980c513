"""Schemas for dietary profiles and meal history."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from .base import CamelModel

MealType = Literal["breakfast", "lunch", "dinner", "snack"]

PROFILE_LIST_FIELDS = (
    "dietary_preferences",
    "allergies",
    "food_intolerances",
    "disliked_ingredients",
    "preferred_cuisines",
    "health_conditions",
    "medications",
)


class DietaryProfileRequest(CamelModel):
    """Profile fields accepted by POST /api/dietary/profile.

    Every field is optional so the same payload can create a profile or
    partially update an existing one.
    """

    age: Optional[int] = Field(None, ge=1, le=120, examples=[34])
    height: Optional[float] = Field(None, gt=0, le=300, examples=[172.0], description="Height in centimeters")
    weight: Optional[float] = Field(None, gt=0, le=500, examples=[68.5], description="Weight in kilograms")
    gender: Optional[str] = Field(None, examples=["female"])
    activity_level: Optional[str] = Field(None, examples=["moderately_active"])
    health_goal: Optional[str] = Field(None, examples=["weight_loss"])
    target_weight: Optional[float] = Field(None, gt=0, le=500)
    dietary_preferences: Optional[List[str]] = Field(None, examples=[["vegetarian"]])
    allergies: Optional[List[str]] = Field(None, examples=[["nuts"]])
    food_intolerances: Optional[List[str]] = None
    disliked_ingredients: Optional[List[str]] = None
    preferred_cuisines: Optional[List[str]] = Field(None, examples=[["italian", "indian"]])
    health_conditions: Optional[List[str]] = None
    medications: Optional[List[str]] = None
    preferred_meal_timing: Optional[str] = None
    calorie_target: Optional[int] = Field(None, ge=0, le=10000)
    protein_target: Optional[int] = Field(None, ge=0, le=1000)
    carb_target: Optional[int] = Field(None, ge=0, le=2000)
    fat_target: Optional[int] = Field(None, ge=0, le=1000)
    budget_range: Optional[str] = Field(None, examples=["medium"])
    dining_frequency: Optional[str] = Field(None, examples=["weekly"])
    social_dining: Optional[bool] = None


class DietaryProfileResponse(CamelModel):
    """Stored profile as returned by GET /api/dietary/profile."""

    id: Optional[int] = None
    user_id: str
    age: Optional[int] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    gender: Optional[str] = None
    activity_level: Optional[str] = None
    health_goal: Optional[str] = None
    target_weight: Optional[float] = None
    dietary_preferences: List[str] = []
    allergies: List[str] = []
    food_intolerances: List[str] = []
    disliked_ingredients: List[str] = []
    preferred_cuisines: List[str] = []
    health_conditions: List[str] = []
    medications: List[str] = []
    preferred_meal_timing: Optional[str] = None
    calorie_target: Optional[int] = None
    protein_target: Optional[int] = None
    carb_target: Optional[int] = None
    fat_target: Optional[int] = None
    budget_range: Optional[str] = None
    dining_frequency: Optional[str] = None
    social_dining: Optional[bool] = None
    last_recommendation_update: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MealHistoryRequest(CamelModel):
    """Payload for logging a meal. The server stamps meal_date when omitted."""

    restaurant_id: Optional[int] = Field(None, examples=[1])
    menu_item_id: Optional[int] = Field(None, examples=[3])
    meal_type: Optional[MealType] = None
    meal_date: Optional[datetime] = None
    portion_size: Optional[Literal["small", "medium", "large"]] = None
    satisfaction_rating: Optional[int] = Field(None, ge=1, le=5)
    taste_rating: Optional[int] = Field(None, ge=1, le=5)
    healthiness_rating: Optional[int] = Field(None, ge=1, le=5)
    value_rating: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = Field(None, max_length=2000)
    would_order_again: Optional[bool] = None


class MealHistoryEntry(CamelModel):
    """A logged meal joined with the names of what was eaten."""

    id: int
    user_id: str
    restaurant_id: Optional[int] = None
    menu_item_id: Optional[int] = None
    restaurant_name: Optional[str] = None
    menu_item_name: Optional[str] = None
    meal_type: Optional[str] = None
    meal_date: datetime
    portion_size: Optional[str] = None
    satisfaction_rating: Optional[int] = None
    taste_rating: Optional[int] = None
    healthiness_rating: Optional[int] = None
    value_rating: Optional[int] = None
    notes: Optional[str] = None
    would_order_again: Optional[bool] = None
