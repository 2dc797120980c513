"""Dietary profile, meal history and recommendation endpoints.

Write and generate paths fail loudly: stores and the engine raise typed
errors and the registered exception handlers turn them into JSON error
responses. Read paths that feed the recommendation UI (stored
recommendations, matching items) log failures and return an empty list.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from api.dependencies import get_catalog_reader, get_current_user_id, get_recommendation_engine
from core.exceptions import AppException
from core.logger import get_logger
from database.deps import get_db_read, get_db_write
from database.models import utcnow
from schemas import (
    BMIRequest,
    BMIResponse,
    DietaryProfileRequest,
    DietaryProfileResponse,
    EnrichedRecommendation,
    GenerationRequest,
    MatchingItemsResponse,
    MealHistoryRequest,
    MessageResponse,
    RecommendationListResponse,
    RecommendationRecord,
    RecommendationRequest,
)
from schemas.dietary_schema import MealType
from services.catalog_reader import CatalogReader
from services.dietary_storage import MealHistoryStore, ProfileStore, profile_to_response
from services.menu_matcher import menu_matcher
from services.nutrition_calculator import nutrition_calculator
from services.recommendation_engine import DietaryRecommendationEngine

logger = get_logger("api.dietary")
router = APIRouter(prefix="/api/dietary", tags=["dietary"])


def enrich_recommendations(catalog: CatalogReader, records: List[RecommendationRecord]) -> List[EnrichedRecommendation]:
    """Attach live restaurant / menu item detail to each record.

    A failed lookup leaves that record without detail; the others are
    still enriched.
    """
    out = []
    for rec in records:
        enriched = EnrichedRecommendation(**rec.model_dump())
        try:
            if rec.type == "restaurant" and rec.target_id:
                enriched.restaurant = catalog.get_restaurant(rec.target_id)
            elif rec.type == "menu_item" and rec.target_id:
                enriched.menu_item = catalog.get_menu_item(rec.target_id)
                if enriched.menu_item is not None:
                    enriched.restaurant = catalog.get_restaurant(enriched.menu_item.restaurant_id)
        except Exception:
            logger.warning("Failed to fetch details for %s %s", rec.type, rec.target_id, exc_info=True)
            enriched.restaurant = None
            enriched.menu_item = None
        out.append(enriched)
    return out


@router.get("/profile", response_model=Optional[DietaryProfileResponse])
def get_profile(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_read)):
    """Return the caller's dietary profile, or null when none exists."""
    profile = ProfileStore(db).get(user_id)
    return profile_to_response(profile) if profile else None


@router.post("/profile", response_model=MessageResponse)
def save_profile(
    payload: DietaryProfileRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db_write),
):
    """Create the caller's profile, or merge the supplied fields into it.

    Raises:
        DatabaseError: If the profile cannot be written.
    """
    created = ProfileStore(db).save(user_id, payload.model_dump(exclude_unset=True))
    logger.info("Dietary profile %s for user %s", "created" if created else "updated", user_id)
    return MessageResponse(message="Dietary profile saved successfully")


@router.post("/recommendations", response_model=RecommendationListResponse)
def generate_recommendations(
    payload: Optional[RecommendationRequest] = None,
    user_id: str = Depends(get_current_user_id),
    engine: DietaryRecommendationEngine = Depends(get_recommendation_engine),
):
    """Run the generation pipeline (or serve fresh cached results).

    Raises:
        RecommendationGenerationError: If the scoring provider fails.
    """
    payload = payload or RecommendationRequest()
    records = engine.generate(GenerationRequest(user_id=user_id, **payload.model_dump()))
    return RecommendationListResponse(recommendations=[EnrichedRecommendation(**r.model_dump()) for r in records])


@router.get("/recommendations", response_model=RecommendationListResponse)
def get_recommendations(
    limit: int = Query(10, ge=1, le=50),
    user_id: str = Depends(get_current_user_id),
    engine: DietaryRecommendationEngine = Depends(get_recommendation_engine),
    catalog: CatalogReader = Depends(get_catalog_reader),
):
    """Return stored recommendations with catalog detail.

    Generates a first batch when nothing is stored. Never fails: any error
    yields an empty list.
    """
    try:
        records = engine.get_stored(user_id, limit)
        if not records:
            logger.info("No stored recommendations for user %s, generating", user_id)
            try:
                records = engine.generate(GenerationRequest(user_id=user_id, max_recommendations=limit))
            except AppException as exc:
                logger.warning("Auto-generation failed for user %s: %s", user_id, exc.message)
                records = []
        return RecommendationListResponse(recommendations=enrich_recommendations(catalog, records))
    except Exception:
        logger.exception("Error fetching stored recommendations for user %s", user_id)
        return RecommendationListResponse(recommendations=[])


@router.get("/restaurant-recommendations", response_model=RecommendationListResponse)
def get_restaurant_recommendations(
    meal_type: Optional[MealType] = Query(None, alias="mealType"),
    user_id: str = Depends(get_current_user_id),
    engine: DietaryRecommendationEngine = Depends(get_recommendation_engine),
    catalog: CatalogReader = Depends(get_catalog_reader),
):
    """Restaurant-only recommendations, at most five."""
    records = engine.generate(GenerationRequest(
        user_id=user_id,
        meal_type=meal_type,
        max_recommendations=5,
        include_restaurants=True,
        include_menu_items=False,
    ))
    return RecommendationListResponse(recommendations=enrich_recommendations(catalog, records))


@router.get("/menu-recommendations", response_model=RecommendationListResponse)
def get_menu_recommendations(
    meal_type: Optional[MealType] = Query(None, alias="mealType"),
    restaurant_id: Optional[int] = Query(None, alias="restaurantId", ge=1),
    user_id: str = Depends(get_current_user_id),
    engine: DietaryRecommendationEngine = Depends(get_recommendation_engine),
    catalog: CatalogReader = Depends(get_catalog_reader),
):
    """Menu-item-only recommendations, optionally limited to one restaurant."""
    records = engine.generate(GenerationRequest(
        user_id=user_id,
        meal_type=meal_type,
        max_recommendations=10,
        include_restaurants=False,
        include_menu_items=True,
    ))
    items = enrich_recommendations(catalog, records)
    if restaurant_id is not None:
        items = [r for r in items if r.menu_item is not None and r.menu_item.restaurant_id == restaurant_id]
    return RecommendationListResponse(recommendations=items)


@router.get("/restaurant/{restaurant_id}/matching-items", response_model=MatchingItemsResponse)
def get_matching_items(
    restaurant_id: int = Path(..., ge=1),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db_read),
    catalog: CatalogReader = Depends(get_catalog_reader),
):
    """Up to six of the restaurant's dishes that best fit the caller's profile."""
    try:
        row = ProfileStore(db).get(user_id)
        profile = profile_to_response(row).model_dump() if row else None
        items = catalog.list_menu_items_for_restaurant(restaurant_id)
        return MatchingItemsResponse(items=menu_matcher.match(profile, items))
    except Exception:
        logger.exception("Error fetching matching menu items for restaurant %s", restaurant_id)
        return MatchingItemsResponse(items=[])


@router.post("/meal-history", response_model=MessageResponse)
def record_meal_history(
    payload: MealHistoryRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db_write),
):
    """Append a meal to the caller's history. The meal date defaults to now.

    Raises:
        DatabaseError: If the entry cannot be written.
    """
    fields = payload.model_dump(exclude_unset=True)
    if fields.get("meal_date") is None:
        fields["meal_date"] = utcnow()
    MealHistoryStore(db).record(user_id, fields)
    logger.info("Meal history recorded for user %s", user_id)
    return MessageResponse(message="Meal history recorded successfully")


@router.post("/bmi", response_model=BMIResponse)
def calculate_bmi(payload: BMIRequest):
    """BMI, category and suggestions. No authentication required."""
    return BMIResponse(**nutrition_calculator.assess_bmi(payload.weight, payload.height))
