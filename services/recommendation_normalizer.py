"""Coerce untrusted scorer output into `RecommendationRecord` objects.

The scoring provider returns free-form JSON. Field names may be camelCase
or snake_case and any field may be missing or of the wrong type. Every field
is resolved through a small coercion table (aliases, type check, default),
so `normalize_recommendations` never raises and never yields a null where a
typed default is expected.
"""

import math
from typing import Any, Dict, List, Sequence

from schemas.recommendation_schema import RecommendationRecord

DEFAULT_SCORE = 0.7
DEFAULT_REASONING = ["AI recommendation"]
DEFAULT_HIGHLIGHTS = ["Nutritional analysis pending"]

MENU_ITEM_SPELLINGS = {"menu_item", "menuitem", "menu-item", "menu item", "dish", "item"}

SCORE_ALIASES = {
    "score": ("score", "recommendation_score", "recommendationScore"),
    "nutritional_match": ("nutritionalMatch", "nutritional_match"),
    "preference_match": ("preferenceMatch", "preference_match"),
    "health_goal_alignment": ("healthGoalAlignment", "health_goal_alignment"),
}

LIST_ALIASES = {
    "reasoning": (("reasoning", "reasons", "reasoning_factors", "reasoningFactors"), DEFAULT_REASONING),
    "nutritional_highlights": (("nutritionalHighlights", "nutritional_highlights"), DEFAULT_HIGHLIGHTS),
    "cautionary_notes": (("cautionaryNotes", "cautionary_notes"), []),
}

TARGET_ALIASES = ("targetId", "target_id", "id")
MAX_TARGET_ID = 2**63 - 1


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def coerce_score(raw: Dict[str, Any], aliases: Sequence[str]) -> float:
    """First numeric alias, clamped to [0, 1]; DEFAULT_SCORE otherwise."""
    for key in aliases:
        value = raw.get(key)
        if _is_number(value):
            if isinstance(value, int):
                # JSON ints are unbounded; float() could overflow
                return 1.0 if value >= 1 else 0.0
            return min(1.0, max(0.0, value))
    return DEFAULT_SCORE


def _string_list(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    items = [str(v).strip() for v in value if v is not None and not isinstance(v, (dict, list))]
    return [v for v in items if v]


def coerce_string_list(raw: Dict[str, Any], aliases: Sequence[str], default: List[str]) -> List[str]:
    """First alias holding at least one usable string; a copy of ``default`` otherwise."""
    for key in aliases:
        items = _string_list(raw.get(key))
        if items:
            return items
    return list(default)


def coerce_type(value: Any) -> str:
    if isinstance(value, str) and value.strip().lower() in MENU_ITEM_SPELLINGS:
        return "menu_item"
    return "restaurant"


def _target_id(value: Any) -> int:
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return 0
    if not _is_number(value):
        return 0
    value = int(value)
    return value if 0 < value <= MAX_TARGET_ID else 0


def coerce_target_id(raw: Dict[str, Any], aliases: Sequence[str] = TARGET_ALIASES) -> int:
    """First alias naming a positive integer id, or 0 when none can name a catalog row."""
    for key in aliases:
        target_id = _target_id(raw.get(key))
        if target_id:
            return target_id
    return 0


def normalize_recommendation(raw: Dict[str, Any]) -> RecommendationRecord:
    """Build one canonical record from a single untrusted JSON object."""
    fields: Dict[str, Any] = {
        "type": coerce_type(raw.get("type")),
        "target_id": coerce_target_id(raw),
    }
    for name, aliases in SCORE_ALIASES.items():
        fields[name] = coerce_score(raw, aliases)
    for name, (aliases, default) in LIST_ALIASES.items():
        fields[name] = coerce_string_list(raw, aliases, default)
    return RecommendationRecord(**fields)


def normalize_recommendations(payload: Any) -> List[RecommendationRecord]:
    """Normalize a whole scorer response.

    Accepts ``{"recommendations": [...]}`` or a bare list of records. Any
    other shape yields an empty list; entries that are not objects are
    dropped.
    """
    if isinstance(payload, dict):
        items = payload.get("recommendations")
    else:
        items = payload
    if not isinstance(items, list):
        return []
    return [normalize_recommendation(item) for item in items if isinstance(item, dict)]
