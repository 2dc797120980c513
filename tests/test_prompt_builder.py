"""Prompt text sent to the scoring provider."""

from datetime import datetime

from schemas import MealHistoryEntry, MenuItemDetail, RestaurantDetail
from services.prompt_builder import (
    RESPONSE_CONTRACT,
    build_system_prompt,
    build_user_prompt,
    menu_item_line,
    restaurant_line,
    summarize_meal_history,
)


def test_empty_history_is_stated():
    assert summarize_meal_history([]) == "No meal history recorded."


def test_history_summary_is_capped():
    entries = [
        MealHistoryEntry(id=i, user_id="u1", meal_date=datetime(2026, 1, i + 1), menu_item_name=f"Dish {i}")
        for i in range(15)
    ]
    summary = summarize_meal_history(entries, limit=10)
    assert len(summary.splitlines()) == 10
    assert "Dish 9 at unknown restaurant" in summary
    assert "Dish 10" not in summary


def test_system_prompt_ends_with_the_response_contract():
    prompt = build_system_prompt({"allergies": ["peanuts"]}, [], None, True, False)
    assert "Allergies: peanuts" in prompt
    assert "Meal Type: any" in prompt
    assert "Include Menu Items: false" in prompt
    assert prompt.endswith(RESPONSE_CONTRACT)


def test_candidate_lines():
    restaurant = RestaurantDetail(id=4, name="Leaf", cuisine="vegan", dietary_options=["vegan"], health_focused=True)
    dish = MenuItemDetail(id=9, restaurant_id=4, name="Buddha Bowl", price=8.5, calories=450, restaurant_name="Leaf")
    assert restaurant_line(restaurant).startswith("- ID: 4, Name: Leaf, Cuisine: vegan")
    assert "Health-focused: true" in restaurant_line(restaurant)
    line = menu_item_line(dish)
    assert "Restaurant: Leaf" in line
    assert "Price: €8.50" in line
    assert "Calories: 450" in line


def test_user_prompt_sections_follow_the_include_flags():
    prompt = build_user_prompt([], [], include_restaurants=True, include_menu_items=True, max_recommendations=4)
    assert "AVAILABLE RESTAURANTS:\n(none available)" in prompt
    assert "AVAILABLE MENU ITEMS:\n(none available)" in prompt
    assert "up to 4 personalized recommendations" in prompt

    prompt = build_user_prompt([], [], include_restaurants=False, include_menu_items=True)
    assert "AVAILABLE RESTAURANTS:" not in prompt
