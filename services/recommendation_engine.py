"""Personalized recommendation engine.

Assembles a user's dietary profile, recent meals and the eligible catalog,
asks the scoring provider to rank candidates, normalizes whatever comes
back, and stores the result for a limited time. Fresh stored results are
served without calling the provider again.

Collaborators are passed in: a SQLAlchemy session factory (each unit of work
opens its own session, including the worker threads of the parallel fetch),
a scorer exposing ``complete(system_prompt, user_prompt) -> str`` and
a ``model_version`` attribute, the settings object, and a clock.
"""

import json
import threading
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session, sessionmaker

from core.config import Settings, settings as default_settings
from core.exceptions import RecommendationGenerationError
from core.logger import get_logger
from database.models import utcnow
from schemas.dietary_schema import MealHistoryEntry
from schemas.recommendation_schema import GenerationRequest, MenuItemDetail, RecommendationRecord, RestaurantDetail
from services.catalog_reader import CatalogReader
from services.dietary_storage import MealHistoryStore, ProfileStore, RecommendationCache, profile_to_response
from services.prompt_builder import build_system_prompt, build_user_prompt
from services.recommendation_normalizer import normalize_recommendations

logger = get_logger("services.recommendation_engine")

HISTORY_LIMIT = 20
RESTAURANT_PROMPT_LIMIT = 20
MENU_ITEM_PROMPT_LIMIT = 40

DEFAULT_PROFILE: Dict[str, Any] = {
    "age": None,
    "height": None,
    "weight": None,
    "gender": None,
    "activity_level": "moderate",
    "health_goal": "maintain",
    "target_weight": None,
    "dietary_preferences": [],
    "allergies": [],
    "food_intolerances": [],
    "disliked_ingredients": [],
    "preferred_cuisines": [],
    "health_conditions": [],
    "medications": [],
    "calorie_target": 2000,
    "protein_target": None,
    "carb_target": None,
    "fat_target": None,
    "budget_range": "medium",
    "dining_frequency": "weekly",
}


def default_profile(user_id: str) -> Dict[str, Any]:
    """Profile used for users who have not filled one in yet."""
    profile = {key: (list(value) if isinstance(value, list) else value) for key, value in DEFAULT_PROFILE.items()}
    profile["user_id"] = user_id
    return profile


def parse_scorer_response(raw: str) -> List[RecommendationRecord]:
    """Decode the provider's reply and normalize every record in it.

    Raises:
        RecommendationGenerationError: If the reply is not a JSON object or list.
    """
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise RecommendationGenerationError("provider returned malformed JSON") from exc
    if not isinstance(payload, (dict, list)):
        raise RecommendationGenerationError("provider returned an unexpected top-level value")
    return normalize_recommendations(payload)


class UserLocks:
    """Per-user mutexes so concurrent cache misses for one user share a generation."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, list] = {}

    @contextmanager
    def hold(self, user_id: str):
        with self._guard:
            entry = self._locks.setdefault(user_id, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[user_id]


_in_flight = UserLocks()


def requested_types(request: GenerationRequest) -> Tuple[str, ...]:
    """Recommendation types the request asks for, in a stable order."""
    types = []
    if request.include_restaurants:
        types.append("restaurant")
    if request.include_menu_items:
        types.append("menu_item")
    return tuple(types)


class DietaryRecommendationEngine:
    """Generate, cache and read back personalized recommendations."""

    def __init__(
        self,
        session_factory: sessionmaker,
        scorer,
        config: Settings = default_settings,
        clock: Callable[[], datetime] = utcnow,
        coalesce_requests: bool = True,
        locks: Optional[UserLocks] = None,
    ):
        """Initialize the engine.

        Parameters
        ----------
        session_factory: sessionmaker
            Factory for write-capable sessions.
        scorer:
            Scoring provider client (see `services.llm_scorer`).
        coalesce_requests: bool
            When True, concurrent cache misses for the same user wait for a
            single generation instead of each calling the provider.
        """
        self.session_factory = session_factory
        self.scorer = scorer
        self.config = config
        self.clock = clock
        self.coalesce_requests = coalesce_requests
        self.locks = locks or _in_flight

    @contextmanager
    def _session(self):
        session: Session = self.session_factory()
        try:
            yield session
        finally:
            session.close()

    def _cache(self, session: Session) -> RecommendationCache:
        return RecommendationCache(session, ttl=self.config.recommendation_ttl, clock=self.clock)

    def generate(self, request: GenerationRequest) -> List[RecommendationRecord]:
        """Return recommendations for ``request.user_id``, best score first.

        Fresh cached records of the requested types short-circuit the whole
        pipeline. Records of other types, cached or returned by the provider,
        are neither served nor replaced.

        Raises:
            RecommendationGenerationError: If the scoring provider fails.
            DatabaseError: If the results cannot be stored.
        """
        types = requested_types(request)
        if not types:
            logger.info("Neither restaurants nor menu items requested for user %s", request.user_id)
            return []
        cached = self.get_cached(request.user_id, request.max_recommendations, types)
        if cached:
            logger.info("Returning %s cached recommendations for user %s", len(cached), request.user_id)
            return cached
        if not self.coalesce_requests:
            return self._generate_uncached(request)
        with self.locks.hold(request.user_id):
            cached = self.get_cached(request.user_id, request.max_recommendations, types)
            if cached:
                logger.info("Recommendations for user %s were generated by a concurrent request", request.user_id)
                return cached
            return self._generate_uncached(request)

    def get_cached(
        self, user_id: str, limit: int = 10, types: Optional[Sequence[str]] = None
    ) -> List[RecommendationRecord]:
        """Records recent enough to count as a cache hit, optionally of the given types only."""
        with self._session() as session:
            return self._cache(session).get_fresh(user_id, self.config.cache_window, limit=limit, types=types)

    def get_stored(self, user_id: str, limit: int = 10) -> List[RecommendationRecord]:
        """Every unexpired stored record, best score first."""
        with self._session() as session:
            return self._cache(session).list_valid(user_id, limit=limit)

    def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Stored profile as a plain dict, or None."""
        with self._session() as session:
            row = ProfileStore(session).get(user_id)
            return profile_to_response(row).model_dump() if row else None

    def _read(self, fn: Callable[[Session], Any]) -> Any:
        with self._session() as session:
            return fn(session)

    def _fetch_context(
        self, request: GenerationRequest
    ) -> Tuple[List[MealHistoryEntry], List[RestaurantDetail], List[MenuItemDetail]]:
        user_id = request.user_id
        with ThreadPoolExecutor(max_workers=3, thread_name_prefix="dietary-fetch") as pool:
            history_future = pool.submit(self._read, lambda s: MealHistoryStore(s).list(user_id, HISTORY_LIMIT))
            restaurants_future = pool.submit(self._read, lambda s: CatalogReader(s).list_eligible_restaurants())
            menu_future = None
            if request.include_menu_items:
                menu_future = pool.submit(self._read, lambda s: CatalogReader(s).list_eligible_menu_items())
            history = history_future.result()
            restaurants = restaurants_future.result()
            menu_items = menu_future.result() if menu_future is not None else []
        return history, restaurants[:RESTAURANT_PROMPT_LIMIT], menu_items[:MENU_ITEM_PROMPT_LIMIT]

    def _score(self, system_prompt: str, user_prompt: str) -> List[RecommendationRecord]:
        try:
            raw = self.scorer.complete(system_prompt, user_prompt)
        except RecommendationGenerationError:
            raise
        except Exception as exc:
            logger.error("Scoring provider raised %s", type(exc).__name__, exc_info=True)
            raise RecommendationGenerationError(f"provider error: {type(exc).__name__}") from exc
        return parse_scorer_response(raw)

    def _generate_uncached(self, request: GenerationRequest) -> List[RecommendationRecord]:
        user_id = request.user_id
        profile = self.get_profile(user_id)
        has_profile = profile is not None
        if not has_profile:
            logger.info("No dietary profile for user %s, using defaults", user_id)
            profile = default_profile(user_id)

        history, restaurants, menu_items = self._fetch_context(request)

        system_prompt = build_system_prompt(
            profile,
            history,
            request.meal_type,
            request.include_restaurants,
            request.include_menu_items,
        )
        user_prompt = build_user_prompt(
            restaurants,
            menu_items,
            request.include_restaurants,
            request.include_menu_items,
            request.max_recommendations,
        )
        logger.info(
            "Requesting recommendations for user %s (%s restaurants, %s menu items, %s past meals)",
            user_id, len(restaurants), len(menu_items), len(history),
        )
        types = requested_types(request)
        records = [r for r in self._score(system_prompt, user_prompt) if r.type in types]
        records.sort(key=lambda r: r.score, reverse=True)

        now = self.clock()
        with self._session() as session:
            stored = self._cache(session).put(
                user_id,
                records,
                meal_type=request.meal_type,
                model_version=getattr(self.scorer, "model_version", None),
                now=now,
                types=types,
            )
            if has_profile:
                ProfileStore(session).mark_recommendations_updated(user_id, now)
        return stored[:request.max_recommendations]
