"""SQLAlchemy ORM models for the dietary recommendation service.

Dietary profiles, meal history and stored recommendations are owned by this
service. Restaurants and menu items belong to the wider marketplace; they are
mapped here so the catalog reader can query them. List-valued attributes are
stored as JSON-encoded text, in the same way throughout.
"""

from sqlalchemy import Boolean, Column, Integer, String, Float, DateTime, ForeignKey, Text
from sqlalchemy.orm import declarative_base
from datetime import datetime, timezone

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how the DateTime columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Convert an offset-aware datetime to naive UTC; naive values are taken as UTC already."""
    if value.tzinfo is None or value.utcoffset() is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class DietaryProfile(Base):
    """Health and taste profile of a single user."""

    __tablename__ = "user_dietary_profiles"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, unique=True, index=True)
    age = Column(Integer, nullable=True)
    height = Column(Float, nullable=True)  # cm
    weight = Column(Float, nullable=True)  # kg
    gender = Column(String, nullable=True)
    activity_level = Column(String, nullable=True)
    health_goal = Column(String, nullable=True)
    target_weight = Column(Float, nullable=True)
    dietary_preferences = Column(Text, nullable=True)
    allergies = Column(Text, nullable=True)
    food_intolerances = Column(Text, nullable=True)
    disliked_ingredients = Column(Text, nullable=True)
    preferred_cuisines = Column(Text, nullable=True)
    health_conditions = Column(Text, nullable=True)
    medications = Column(Text, nullable=True)
    preferred_meal_timing = Column(String, nullable=True)
    calorie_target = Column(Integer, nullable=True)
    protein_target = Column(Integer, nullable=True)
    carb_target = Column(Integer, nullable=True)
    fat_target = Column(Integer, nullable=True)
    budget_range = Column(String, nullable=True)
    dining_frequency = Column(String, nullable=True)
    social_dining = Column(Boolean, default=False)
    last_recommendation_update = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow)


class MealHistory(Base):
    """One logged meal. Rows are never updated or deleted."""

    __tablename__ = "user_meal_history"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    restaurant_id = Column(Integer, ForeignKey('restaurants.id'), nullable=True)
    menu_item_id = Column(Integer, ForeignKey('menu_items.id'), nullable=True)
    meal_type = Column(String, nullable=True)
    meal_date = Column(DateTime, nullable=False)
    portion_size = Column(String, nullable=True)
    satisfaction_rating = Column(Integer, nullable=True)  # 1-5
    taste_rating = Column(Integer, nullable=True)  # 1-5
    healthiness_rating = Column(Integer, nullable=True)  # 1-5
    value_rating = Column(Integer, nullable=True)  # 1-5
    notes = Column(Text, nullable=True)
    would_order_again = Column(Boolean, nullable=True)
    created_at = Column(DateTime, default=utcnow)


class Restaurant(Base):
    """Marketplace restaurant. Only active and approved rows are recommendable."""

    __tablename__ = "restaurants"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    cuisine = Column(String, nullable=True)
    price_range = Column(String, nullable=True)
    location = Column(String, nullable=True)
    rating = Column(Float, nullable=True)
    features = Column(Text, nullable=True)
    dietary_options = Column(Text, nullable=True)
    allergen_info = Column(Text, nullable=True)
    health_focused = Column(Boolean, default=False)
    is_active = Column(Boolean, default=True)
    is_approved = Column(Boolean, default=False)
    created_at = Column(DateTime, default=utcnow)


class MenuItem(Base):
    """Dish offered by a restaurant."""

    __tablename__ = "menu_items"
    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey('restaurants.id'), nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=True)
    price = Column(Float, nullable=True)
    ingredients = Column(Text, nullable=True)
    allergens = Column(Text, nullable=True)
    dietary_tags = Column(Text, nullable=True)
    spice_level = Column(Integer, nullable=True)
    calories = Column(Integer, nullable=True)
    preparation_time = Column(Integer, nullable=True)  # minutes
    is_available = Column(Boolean, default=True)
    created_at = Column(DateTime, default=utcnow)


class PersonalizedRecommendation(Base):
    """A stored, normalized recommendation produced by the scoring provider."""

    __tablename__ = "personalized_recommendations"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    type = Column(String, nullable=False)  # restaurant | menu_item
    target_id = Column(Integer, nullable=False, default=0)
    recommendation_score = Column(Float, nullable=False)
    nutritional_match = Column(Float, nullable=False)
    preference_match = Column(Float, nullable=False)
    health_goal_alignment = Column(Float, nullable=False)
    reasoning_factors = Column(Text, nullable=False)
    nutritional_highlights = Column(Text, nullable=False)
    cautionary_notes = Column(Text, nullable=False)
    recommendation_text = Column(Text, nullable=True)
    recommended_for = Column(String, nullable=True)
    ai_model_version = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True)
    expires_at = Column(DateTime, nullable=False)
