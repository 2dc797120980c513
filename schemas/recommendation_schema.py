"""Schemas for recommendation requests, records and catalog detail."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from .base import CamelModel
from .dietary_schema import MealType

RecommendationType = Literal["restaurant", "menu_item"]


class RecommendationRequest(CamelModel):
    """Body of POST /api/dietary/recommendations."""

    meal_type: Optional[MealType] = Field(None, examples=["lunch"])
    max_recommendations: int = Field(10, ge=1, le=50, examples=[5])
    include_restaurants: bool = True
    include_menu_items: bool = True


class GenerationRequest(RecommendationRequest):
    """Recommendation request bound to the user it is generated for."""

    user_id: str


class RecommendationRecord(CamelModel):
    """One normalized recommendation, as stored and as returned."""

    id: Optional[int] = None
    type: RecommendationType = "restaurant"
    target_id: int = 0
    score: float = Field(..., ge=0.0, le=1.0)
    reasoning: List[str]
    nutritional_highlights: List[str]
    cautionary_notes: List[str] = []
    nutritional_match: float = Field(..., ge=0.0, le=1.0)
    preference_match: float = Field(..., ge=0.0, le=1.0)
    health_goal_alignment: float = Field(..., ge=0.0, le=1.0)
    recommended_for: Optional[str] = None
    created_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None


class RestaurantDetail(CamelModel):
    """Projection of a catalog restaurant."""

    id: int
    name: str
    cuisine: Optional[str] = None
    price_range: Optional[str] = None
    location: Optional[str] = None
    rating: Optional[float] = None
    features: List[str] = []
    dietary_options: List[str] = []
    allergen_info: List[str] = []
    health_focused: bool = False


class MenuItemDetail(CamelModel):
    """Projection of a catalog menu item, optionally with its restaurant denormalized."""

    id: int
    restaurant_id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = None
    ingredients: List[str] = []
    allergens: List[str] = []
    dietary_tags: List[str] = []
    spice_level: Optional[int] = None
    calories: Optional[int] = None
    preparation_time: Optional[int] = None
    is_available: bool = True
    restaurant_name: Optional[str] = None
    restaurant_cuisine: Optional[str] = None
    restaurant_location: Optional[str] = None
    restaurant_rating: Optional[float] = None


class EnrichedRecommendation(RecommendationRecord):
    """Recommendation with live catalog detail attached for display."""

    restaurant: Optional[RestaurantDetail] = None
    menu_item: Optional[MenuItemDetail] = None


class RecommendationListResponse(CamelModel):
    recommendations: List[EnrichedRecommendation]


class MatchedMenuItem(MenuItemDetail):
    """Menu item with its local profile match score (None when unscored)."""

    match_score: Optional[int] = None


class MatchingItemsResponse(CamelModel):
    items: List[MatchedMenuItem]
