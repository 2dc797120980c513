"""Chat messages sent to the scoring provider.

The system message carries the user's profile, the meal context and a short
summary of recent meals, together with the JSON contract the provider must
answer in. The user message enumerates the candidate restaurants and menu
items one per line.
"""

from typing import Any, Dict, List, Optional, Sequence

from schemas.dietary_schema import MealHistoryEntry
from schemas.recommendation_schema import MenuItemDetail, RestaurantDetail

RESPONSE_CONTRACT = """Respond in JSON format:
{
  "recommendations": [
    {
      "type": "restaurant",
      "targetId": 123,
      "score": 0.85,
      "reasoning": ["Brief reason 1", "Brief reason 2"],
      "nutritionalHighlights": ["Highlight 1", "Highlight 2"],
      "cautionaryNotes": ["Note if any"],
      "nutritionalMatch": 0.8,
      "preferenceMatch": 0.9,
      "healthGoalAlignment": 0.85
    }
  ]
}

Use "restaurant" or "menu_item" for type and only ids from the lists provided.
All scores 0-1, arrays contain strings only."""

MAX_PROMPT_HISTORY = 10


def _join(values: Optional[Sequence[Any]], empty: str) -> str:
    values = [str(v) for v in (values or []) if v not in (None, "")]
    return ", ".join(values) if values else empty


def _or(value: Any, fallback: str) -> str:
    return fallback if value in (None, "") else str(value)


def summarize_meal_history(history: Sequence[MealHistoryEntry], limit: int = MAX_PROMPT_HISTORY) -> str:
    """One line per recent meal with whatever ratings the user gave."""
    if not history:
        return "No meal history recorded."
    lines = []
    for entry in history[:limit]:
        what = entry.menu_item_name or "unknown dish"
        where = entry.restaurant_name or "unknown restaurant"
        parts = [f"{what} at {where}"]
        if entry.meal_type:
            parts.append(entry.meal_type)
        if entry.satisfaction_rating is not None:
            parts.append(f"satisfaction {entry.satisfaction_rating}/5")
        if entry.taste_rating is not None:
            parts.append(f"taste {entry.taste_rating}/5")
        if entry.healthiness_rating is not None:
            parts.append(f"healthiness {entry.healthiness_rating}/5")
        if entry.would_order_again is not None:
            parts.append("would order again" if entry.would_order_again else "would not order again")
        if entry.notes:
            parts.append(f'notes: "{entry.notes[:120]}"')
        lines.append("- " + ", ".join(parts))
    return "\n".join(lines)


def build_system_prompt(
    profile: Dict[str, Any],
    history: Sequence[MealHistoryEntry],
    meal_type: Optional[str],
    include_restaurants: bool,
    include_menu_items: bool,
) -> str:
    """Profile, context and meal history followed by the response contract."""
    profile_line = " | ".join([
        f"Health Goal: {_or(profile.get('health_goal'), 'general_health')}",
        f"Diet: {_join(profile.get('dietary_preferences'), 'none')}",
        f"Allergies: {_join(profile.get('allergies'), 'none')}",
        f"Intolerances: {_join(profile.get('food_intolerances'), 'none')}",
        f"Dislikes: {_join(profile.get('disliked_ingredients'), 'none')}",
        f"Conditions: {_join(profile.get('health_conditions'), 'none')}",
        f"Activity: {_or(profile.get('activity_level'), 'moderate')}",
        f"Calories: {_or(profile.get('calorie_target'), 'unspecified')}",
        f"Protein/Carbs/Fat (g): {_or(profile.get('protein_target'), '?')}/"
        f"{_or(profile.get('carb_target'), '?')}/{_or(profile.get('fat_target'), '?')}",
        f"Budget: {_or(profile.get('budget_range'), 'medium')}",
        f"Dining: {_or(profile.get('dining_frequency'), 'weekly')}",
        f"Cuisines: {_join(profile.get('preferred_cuisines'), 'open')}",
    ])
    context_line = (
        f"Meal Type: {meal_type or 'any'} | Include Restaurants: {str(include_restaurants).lower()} "
        f"| Include Menu Items: {str(include_menu_items).lower()}"
    )
    return (
        "You are an AI dietary recommendation engine. Generate personalized restaurant/menu "
        "recommendations based on the user profile.\n\n"
        f"User Profile: {profile_line}\n\n"
        f"Context: {context_line}\n\n"
        f"Recent Meals:\n{summarize_meal_history(history)}\n\n"
        f"{RESPONSE_CONTRACT}"
    )


def restaurant_line(r: RestaurantDetail) -> str:
    return (
        f"- ID: {r.id}, Name: {r.name}, Cuisine: {_or(r.cuisine, 'unknown')}, "
        f"Price: {_or(r.price_range, 'unknown')}, Features: {_join(r.features, 'none')}, "
        f"Dietary Options: {_join(r.dietary_options, 'none')}, Allergens: {_join(r.allergen_info, 'none')}, "
        f"Health-focused: {str(r.health_focused).lower()}, Rating: {_or(r.rating, 'n/a')}, "
        f"Location: {_or(r.location, 'unknown')}"
    )


def menu_item_line(m: MenuItemDetail) -> str:
    price = f"€{m.price:.2f}" if m.price is not None else "not listed"
    return (
        f"- ID: {m.id}, Name: {m.name}, Restaurant: {_or(m.restaurant_name, 'unknown')}, "
        f"Category: {_or(m.category, 'unknown')}, Price: {price}, "
        f"Ingredients: {_join(m.ingredients, 'not listed')}, Dietary Tags: {_join(m.dietary_tags, 'none')}, "
        f"Calories: {_or(m.calories, 'not listed')}, Allergens: {_join(m.allergens, 'none')}"
    )


def build_user_prompt(
    restaurants: Sequence[RestaurantDetail],
    menu_items: Sequence[MenuItemDetail],
    include_restaurants: bool,
    include_menu_items: bool,
    max_recommendations: int = 10,
) -> str:
    """Candidate lists the provider may choose from."""
    sections: List[str] = [
        "Based on the user profile and meal history above, please recommend the most suitable "
        "options from these available choices:"
    ]
    if include_restaurants:
        body = "\n".join(restaurant_line(r) for r in restaurants) or "(none available)"
        sections.append(f"AVAILABLE RESTAURANTS:\n{body}")
    if include_menu_items:
        body = "\n".join(menu_item_line(m) for m in menu_items) or "(none available)"
        sections.append(f"AVAILABLE MENU ITEMS:\n{body}")
    sections.append(
        f"Please provide up to {max_recommendations} personalized recommendations that best match "
        "the user's profile, preferences, and health goals."
    )
    return "\n\n".join(sections)
