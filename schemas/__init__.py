"""Pydantic schema package for request and response models."""

from .base import MessageResponse
from .dietary_schema import DietaryProfileRequest, DietaryProfileResponse, MealHistoryRequest, MealHistoryEntry
from .recommendation_schema import (
    RecommendationRequest,
    GenerationRequest,
    RecommendationRecord,
    EnrichedRecommendation,
    RecommendationListResponse,
    RestaurantDetail,
    MenuItemDetail,
    MatchedMenuItem,
    MatchingItemsResponse,
)
from .nutrition_schema import BMIRequest, BMIResponse

__all__ = [
    "MessageResponse",
    "DietaryProfileRequest",
    "DietaryProfileResponse",
    "MealHistoryRequest",
    "MealHistoryEntry",
    "RecommendationRequest",
    "GenerationRequest",
    "RecommendationRecord",
    "EnrichedRecommendation",
    "RecommendationListResponse",
    "RestaurantDetail",
    "MenuItemDetail",
    "MatchedMenuItem",
    "MatchingItemsResponse",
    "BMIRequest",
    "BMIResponse",
]
