"""Freshness window and expiry ceiling of stored recommendations."""

from datetime import timedelta

from conftest import NOW
from database import models
from schemas import RecommendationRecord
from services.dietary_storage import RecommendationCache

WINDOW = timedelta(hours=2)


def record(score, target_id=1, kind="restaurant"):
    return RecommendationRecord(
        type=kind,
        target_id=target_id,
        score=score,
        reasoning=["reason"],
        nutritional_highlights=["highlight"],
        nutritional_match=score,
        preference_match=score,
        health_goal_alignment=score,
    )


def test_record_stored_90_minutes_ago_is_fresh(db):
    cache = RecommendationCache(db)
    cache.put("u1", [record(0.8)], now=NOW - timedelta(minutes=90))
    fresh = cache.get_fresh("u1", WINDOW, now=NOW)
    assert len(fresh) == 1
    assert fresh[0].score == 0.8


def test_record_stored_3_hours_ago_is_stale_but_still_listed(db):
    cache = RecommendationCache(db)
    cache.put("u1", [record(0.8)], now=NOW - timedelta(hours=3))
    assert cache.get_fresh("u1", WINDOW, now=NOW) == []
    assert len(cache.list_valid("u1", now=NOW)) == 1


def test_expired_record_is_never_served(db):
    cache = RecommendationCache(db)
    cache.put("u1", [record(0.8)], now=NOW - timedelta(hours=25))
    assert cache.get_fresh("u1", timedelta(days=7), now=NOW) == []
    assert cache.list_valid("u1", now=NOW) == []


def test_expiry_wins_over_a_wide_window(db):
    cache = RecommendationCache(db, ttl=timedelta(minutes=30))
    cache.put("u1", [record(0.8)], now=NOW - timedelta(minutes=45))
    assert cache.get_fresh("u1", WINDOW, now=NOW) == []


def test_put_stamps_creation_and_expiry(db):
    cache = RecommendationCache(db)
    stored = cache.put("u1", [record(0.5)], meal_type="lunch", model_version="m-1", now=NOW)
    assert stored[0].id is not None
    assert stored[0].created_at == NOW
    assert stored[0].expires_at == NOW + timedelta(hours=24)
    assert stored[0].recommended_for == "lunch"
    row = db.get(models.PersonalizedRecommendation, stored[0].id)
    assert row.ai_model_version == "m-1"
    assert row.recommendation_text == "reason"


def test_put_replaces_previous_records(db):
    cache = RecommendationCache(db)
    cache.put("u1", [record(0.4), record(0.6, target_id=2)], now=NOW - timedelta(hours=1))
    cache.put("u1", [record(0.9, target_id=3)], now=NOW)
    listed = cache.list_valid("u1", now=NOW)
    assert [r.target_id for r in listed] == [3]


def test_users_do_not_share_records(db):
    cache = RecommendationCache(db)
    cache.put("u1", [record(0.4)], now=NOW)
    cache.put("u2", [record(0.6)], now=NOW)
    assert [r.score for r in cache.get_fresh("u1", WINDOW, now=NOW)] == [0.4]


def test_results_are_ordered_by_score_and_limited(db):
    cache = RecommendationCache(db)
    cache.put("u1", [record(0.3, 1), record(0.9, 2), record(0.6, 3), record(0.1, 4)], now=NOW)
    fresh = cache.get_fresh("u1", WINDOW, limit=3, now=NOW)
    assert [r.score for r in fresh] == [0.9, 0.6, 0.3]


def test_empty_cache_is_not_an_error(db):
    assert RecommendationCache(db).get_fresh("nobody", WINDOW, now=NOW) == []


def test_type_filter_applies_before_the_limit(db):
    cache = RecommendationCache(db)
    menu = [record(0.9 - i * 0.05, target_id=i + 1, kind="menu_item") for i in range(6)]
    cache.put("u1", menu + [record(0.3, target_id=1)], now=NOW)
    fresh = cache.get_fresh("u1", WINDOW, limit=5, now=NOW, types=["restaurant"])
    assert [(r.type, r.score) for r in fresh] == [("restaurant", 0.3)]


def test_put_for_one_type_keeps_the_others(db):
    cache = RecommendationCache(db)
    cache.put("u1", [record(0.8, target_id=5, kind="menu_item"), record(0.4)], now=NOW - timedelta(hours=1))
    cache.put("u1", [record(0.6, target_id=2)], now=NOW, types=["restaurant"])
    listed = cache.list_valid("u1", now=NOW)
    assert [(r.type, r.target_id) for r in listed] == [("menu_item", 5), ("restaurant", 2)]
