"""Local menu matching for a single restaurant.

Scores a restaurant's available menu items against a dietary profile with
simple additive rules, without calling the scoring provider. Used to
highlight dishes on a restaurant page.

Rules, applied per item:

- any allergen shared with the user's allergies excludes the item
- a dietary preference found among the item's tags: +3
- calories within 20% of a third of the daily calorie target: +2
  (within 40%: +1)
- a preferred cuisine mentioned in the item's category: +1
- tagged ``healthy``, ``light`` or ``fresh``: +1
"""

from typing import Any, Dict, List, Optional, Sequence

from core.logger import get_logger
from schemas.recommendation_schema import MatchedMenuItem, MenuItemDetail

logger = get_logger("services.menu_matcher")

HEALTHY_TAGS = {"healthy", "light", "fresh"}


def _lower(values: Optional[Sequence[str]]) -> List[str]:
    return [str(v).lower() for v in (values or [])]


class MenuMatcher:
    """Rank menu items by how well they fit a profile.

    Methods
    -------
    score_item(profile, item)
        Return the item's match score, or -1 when it conflicts with an allergy.
    match(profile, items, limit=6)
        Return the best-scoring compatible items.
    """

    def __init__(self, limit: int = 6):
        self.limit = limit

    def score_item(self, profile: Dict[str, Any], item: MenuItemDetail) -> int:
        tags = _lower(item.dietary_tags)
        allergens = _lower(item.allergens)
        allergies = _lower(profile.get("allergies"))
        if any(a in allergens for a in allergies):
            return -1

        score = 0
        for pref in _lower(profile.get("dietary_preferences")):
            if pref in tags or any(pref in t for t in tags):
                score += 3
                break

        calorie_target = profile.get("calorie_target")
        if calorie_target and item.calories:
            per_meal = calorie_target / 3
            diff = abs(item.calories - per_meal) / per_meal
            if diff < 0.2:
                score += 2
            elif diff < 0.4:
                score += 1

        category = (item.category or "").lower()
        if any(c in category for c in _lower(profile.get("preferred_cuisines"))):
            score += 1

        if HEALTHY_TAGS.intersection(tags):
            score += 1
        return score

    def match(
        self,
        profile: Optional[Dict[str, Any]],
        items: Sequence[MenuItemDetail],
        limit: Optional[int] = None,
    ) -> List[MatchedMenuItem]:
        """Return up to ``limit`` items, best match first.

        Without a profile nothing can be scored, so the first available items
        are returned as they come.
        """
        limit = limit or self.limit
        available = [i for i in items if i.is_available]
        if not profile:
            return [MatchedMenuItem(**i.model_dump()) for i in available[:limit]]

        scored = [(self.score_item(profile, item), item) for item in available]
        compatible = [(s, i) for s, i in scored if s >= 0]
        compatible.sort(key=lambda pair: pair[0], reverse=True)
        logger.debug("Matched %s of %s menu items", len(compatible), len(available))
        return [MatchedMenuItem(**i.model_dump(), match_score=s) for s, i in compatible[:limit]]


menu_matcher = MenuMatcher()
