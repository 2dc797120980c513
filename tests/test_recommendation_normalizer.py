"""Normalization of untrusted scorer output."""

import pytest

from core.exceptions import RecommendationGenerationError
from services.recommendation_engine import parse_scorer_response
from services.recommendation_normalizer import (
    DEFAULT_HIGHLIGHTS,
    DEFAULT_REASONING,
    DEFAULT_SCORE,
    normalize_recommendation,
    normalize_recommendations,
)


def test_camel_case_record_is_read_field_by_field():
    rec = normalize_recommendation({
        "type": "menu_item",
        "targetId": 7,
        "score": 0.82,
        "reasoning": ["High protein", "Low sugar"],
        "nutritionalHighlights": ["30g protein"],
        "cautionaryNotes": ["Contains dairy"],
        "nutritionalMatch": 0.9,
        "preferenceMatch": 0.4,
        "healthGoalAlignment": 0.75,
    })
    assert rec.type == "menu_item"
    assert rec.target_id == 7
    assert rec.score == 0.82
    assert rec.reasoning == ["High protein", "Low sugar"]
    assert rec.nutritional_highlights == ["30g protein"]
    assert rec.cautionary_notes == ["Contains dairy"]
    assert (rec.nutritional_match, rec.preference_match, rec.health_goal_alignment) == (0.9, 0.4, 0.75)


def test_snake_case_aliases_are_accepted():
    rec = normalize_recommendation({
        "target_id": 3,
        "recommendation_score": 0.5,
        "reasoning_factors": ["Close by"],
        "nutritional_highlights": ["Fibre"],
        "cautionary_notes": ["Spicy"],
        "nutritional_match": 0.2,
        "preference_match": 0.3,
        "health_goal_alignment": 0.4,
    })
    assert rec.target_id == 3
    assert rec.score == 0.5
    assert rec.reasoning == ["Close by"]
    assert rec.nutritional_highlights == ["Fibre"]
    assert rec.cautionary_notes == ["Spicy"]
    assert rec.health_goal_alignment == 0.4


def test_empty_object_gets_every_default():
    rec = normalize_recommendation({})
    assert rec.type == "restaurant"
    assert rec.target_id == 0
    assert rec.score == DEFAULT_SCORE
    assert rec.nutritional_match == DEFAULT_SCORE
    assert rec.reasoning == DEFAULT_REASONING
    assert rec.nutritional_highlights == DEFAULT_HIGHLIGHTS
    assert rec.cautionary_notes == []


def test_single_reasoning_string_is_wrapped():
    rec = normalize_recommendation({"reasoning": "Fits your calorie target"})
    assert rec.reasoning == ["Fits your calorie target"]


@pytest.mark.parametrize("value,expected", [
    (True, DEFAULT_SCORE),
    ("0.9", DEFAULT_SCORE),
    (None, DEFAULT_SCORE),
    (float("nan"), DEFAULT_SCORE),
    (float("inf"), DEFAULT_SCORE),
    (1.7, 1.0),
    (-0.2, 0.0),
    (0, 0.0),
    (1, 1.0),
    (10**400, 1.0),
])
def test_scores_are_finite_and_clamped(value, expected):
    assert normalize_recommendation({"score": value}).score == expected


@pytest.mark.parametrize("value,expected", [
    ("menu_item", "menu_item"),
    ("MenuItem", "menu_item"),
    ("dish", "menu_item"),
    ("restaurant", "restaurant"),
    ("cafe", "restaurant"),
    (5, "restaurant"),
])
def test_type_falls_back_to_restaurant(value, expected):
    assert normalize_recommendation({"type": value}).type == expected


@pytest.mark.parametrize("value,expected", [("12", 12), ("abc", 0), (-5, 0), (4.0, 4), (False, 0), ([1], 0)])
def test_target_id_coercion(value, expected):
    assert normalize_recommendation({"targetId": value}).target_id == expected


def test_non_string_list_members_are_dropped():
    rec = normalize_recommendation({"nutritionalHighlights": [None, {"x": 1}, " ", 42]})
    assert rec.nutritional_highlights == ["42"]


@pytest.mark.parametrize("payload", [None, 42, "text", {"recommendations": "nope"}, {"other": []}, {}])
def test_unexpected_top_level_shapes_yield_nothing(payload):
    assert normalize_recommendations(payload) == []


def test_bare_list_and_non_object_entries():
    records = normalize_recommendations([{"targetId": 1}, "junk", 3, None, {"targetId": 2}])
    assert [r.target_id for r in records] == [1, 2]


def test_parse_rejects_malformed_json():
    with pytest.raises(RecommendationGenerationError) as exc_info:
        parse_scorer_response("{not json")
    assert exc_info.value.message == "Failed to generate recommendations"
    assert exc_info.value.status_code == 500


@pytest.mark.parametrize("raw", ['"just a string"', "42", "null"])
def test_parse_rejects_scalar_top_level(raw):
    with pytest.raises(RecommendationGenerationError):
        parse_scorer_response(raw)


def test_parse_accepts_object_without_recommendations():
    assert parse_scorer_response('{"note": "nothing suitable"}') == []


def test_zero_target_id_falls_through_to_next_alias():
    assert normalize_recommendation({"targetId": 0, "id": 7}).target_id == 7
    assert normalize_recommendation({"targetId": "n/a", "target_id": "12"}).target_id == 12


def test_empty_list_falls_through_to_next_alias():
    rec = normalize_recommendation({
        "nutritionalHighlights": [],
        "nutritional_highlights": ["Fibre"],
        "cautionaryNotes": [None],
        "cautionary_notes": "Spicy",
    })
    assert rec.nutritional_highlights == ["Fibre"]
    assert rec.cautionary_notes == ["Spicy"]
