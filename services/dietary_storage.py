"""Persistence for dietary profiles, meal history and generated recommendations.

Each store wraps one request- or task-scoped SQLAlchemy session. Storage
failures are rolled back and re-raised as `DatabaseError` with a stable
message; the routes decide what the client sees.
"""

from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import DatabaseError, NotFoundError, ValidationError
from core.logger import get_logger
from core.repository import BaseRepository, dump_list, load_list
from database import models
from database.models import to_naive_utc, utcnow
from schemas.dietary_schema import PROFILE_LIST_FIELDS, DietaryProfileResponse, MealHistoryEntry
from schemas.recommendation_schema import RecommendationRecord

logger = get_logger("services.dietary_storage")

DEFAULT_RECOMMENDATION_TTL = timedelta(hours=24)


def profile_to_response(profile: models.DietaryProfile) -> DietaryProfileResponse:
    """Decode a stored profile row into its API representation."""
    data = {c.name: getattr(profile, c.name) for c in models.DietaryProfile.__table__.columns}
    for field in PROFILE_LIST_FIELDS:
        data[field] = load_list(data[field])
    return DietaryProfileResponse(**data)


def recommendation_to_record(row: models.PersonalizedRecommendation) -> RecommendationRecord:
    """Decode a stored recommendation row into a `RecommendationRecord`."""
    return RecommendationRecord(
        id=row.id,
        type=row.type,
        target_id=row.target_id or 0,
        score=row.recommendation_score,
        reasoning=load_list(row.reasoning_factors) or ["AI recommendation"],
        nutritional_highlights=load_list(row.nutritional_highlights) or ["Nutritional analysis pending"],
        cautionary_notes=load_list(row.cautionary_notes),
        nutritional_match=row.nutritional_match,
        preference_match=row.preference_match,
        health_goal_alignment=row.health_goal_alignment,
        recommended_for=row.recommended_for,
        created_at=row.created_at,
        expires_at=row.expires_at,
    )


def _encode_profile_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    encoded = {}
    for key, value in fields.items():
        if key in PROFILE_LIST_FIELDS:
            encoded[key] = dump_list(value)
        elif hasattr(models.DietaryProfile, key) and key not in ("id", "user_id", "created_at"):
            encoded[key] = value
    return encoded


class ProfileStore(BaseRepository[models.DietaryProfile]):
    """Accessor for the one-per-user dietary profile."""

    def __init__(self, session: Session):
        super().__init__(models.DietaryProfile, session)

    def get(self, user_id: str) -> Optional[models.DietaryProfile]:
        return self.first_by(user_id=user_id)

    def create(self, user_id: str, fields: Dict[str, Any]) -> models.DietaryProfile:
        """Insert a new profile.

        The unique constraint on ``user_id`` rejects a second profile for the
        same user, including one inserted by a concurrent request.

        Raises:
            DatabaseError: If the insert fails.
        """
        now = utcnow()
        profile = models.DietaryProfile(
            user_id=user_id,
            created_at=now,
            updated_at=now,
            **_encode_profile_fields(fields),
        )
        try:
            profile = super().create(profile)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Error creating dietary profile for user %s: %s", user_id, exc)
            raise DatabaseError("Failed to create dietary profile", operation="create") from exc
        logger.info("Dietary profile created for user %s", user_id)
        return profile

    def update(self, user_id: str, fields: Dict[str, Any]) -> models.DietaryProfile:
        """Merge the provided fields into the existing profile.

        Only keys present in ``fields`` are written; everything else keeps
        its stored value.

        Raises:
            NotFoundError: If the user has no profile.
            DatabaseError: If the update fails.
        """
        profile = self.get(user_id)
        if profile is None:
            raise NotFoundError("DietaryProfile", user_id)
        for key, value in _encode_profile_fields(fields).items():
            setattr(profile, key, value)
        profile.updated_at = utcnow()
        try:
            profile = super().update(profile)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Error updating dietary profile for user %s: %s", user_id, exc)
            raise DatabaseError("Failed to update dietary profile", operation="update") from exc
        return profile

    def save(self, user_id: str, fields: Dict[str, Any]) -> bool:
        """Create the profile or update it in place. Returns True when created."""
        if self.get(user_id) is not None:
            self.update(user_id, fields)
            return False
        self.create(user_id, fields)
        return True

    def mark_recommendations_updated(self, user_id: str, when: datetime) -> None:
        profile = self.get(user_id)
        if profile is None:
            return
        profile.last_recommendation_update = when
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise DatabaseError("Failed to update dietary profile", operation="update") from exc


class MealHistoryStore(BaseRepository[models.MealHistory]):
    """Append-only log of meals a user has eaten."""

    def __init__(self, session: Session):
        super().__init__(models.MealHistory, session)

    def record(self, user_id: str, fields: Dict[str, Any]) -> models.MealHistory:
        """Append one meal.

        Raises:
            ValidationError: If ``user_id`` or ``meal_date`` is missing.
            DatabaseError: If the insert fails.
        """
        if not user_id:
            raise ValidationError("user_id is required", field="user_id")
        if fields.get("meal_date") is None:
            raise ValidationError("meal_date is required", field="meal_date")
        columns = {k: v for k, v in fields.items() if hasattr(models.MealHistory, k) and k not in ("id", "user_id")}
        # DateTime columns hold naive UTC
        columns["meal_date"] = to_naive_utc(columns["meal_date"])
        entry = models.MealHistory(user_id=user_id, created_at=utcnow(), **columns)
        try:
            entry = self.create(entry)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Error recording meal history for user %s: %s", user_id, exc)
            raise DatabaseError("Failed to record meal history", operation="create") from exc
        return entry

    def list(self, user_id: str, limit: int = 50) -> List[MealHistoryEntry]:
        """Return the user's meals, most recent first, capped at ``limit``."""
        rows = (
            self.session.query(models.MealHistory, models.Restaurant.name, models.MenuItem.name)
            .outerjoin(models.Restaurant, models.MealHistory.restaurant_id == models.Restaurant.id)
            .outerjoin(models.MenuItem, models.MealHistory.menu_item_id == models.MenuItem.id)
            .filter(models.MealHistory.user_id == user_id)
            .order_by(models.MealHistory.meal_date.desc(), models.MealHistory.id.desc())
            .limit(limit)
            .all()
        )
        out = []
        for entry, restaurant_name, menu_item_name in rows:
            out.append(MealHistoryEntry(
                id=entry.id,
                user_id=entry.user_id,
                restaurant_id=entry.restaurant_id,
                menu_item_id=entry.menu_item_id,
                restaurant_name=restaurant_name,
                menu_item_name=menu_item_name,
                meal_type=entry.meal_type,
                meal_date=entry.meal_date,
                portion_size=entry.portion_size,
                satisfaction_rating=entry.satisfaction_rating,
                taste_rating=entry.taste_rating,
                healthiness_rating=entry.healthiness_rating,
                value_rating=entry.value_rating,
                notes=entry.notes,
                would_order_again=entry.would_order_again,
            ))
        return out


class RecommendationCache(BaseRepository[models.PersonalizedRecommendation]):
    """Time-windowed store of generated recommendations, keyed by user.

    A record is served as a cache hit only while it is both recent
    (``created_at`` within the caller's window) and unexpired. Expiry is the
    hard ceiling.
    """

    def __init__(
        self,
        session: Session,
        ttl: timedelta = DEFAULT_RECOMMENDATION_TTL,
        clock: Callable[[], datetime] = utcnow,
    ):
        super().__init__(models.PersonalizedRecommendation, session)
        self.ttl = ttl
        self.clock = clock

    def _user_query(self, user_id: str, types: Optional[Sequence[str]] = None):
        query = self.session.query(models.PersonalizedRecommendation).filter(
            models.PersonalizedRecommendation.user_id == user_id
        )
        if types is not None:
            query = query.filter(models.PersonalizedRecommendation.type.in_(list(types)))
        return query

    def _valid_query(self, user_id: str, now: datetime, types: Optional[Sequence[str]] = None):
        return self._user_query(user_id, types).filter(models.PersonalizedRecommendation.expires_at >= now)

    def get_fresh(
        self,
        user_id: str,
        within: timedelta,
        limit: int = 10,
        now: Optional[datetime] = None,
        types: Optional[Sequence[str]] = None,
    ) -> List[RecommendationRecord]:
        """Return records created within ``within`` of now that have not expired.

        ``types`` restricts the result to those recommendation types before
        the limit is applied.
        """
        now = now or self.clock()
        rows = (
            self._valid_query(user_id, now, types)
            .filter(models.PersonalizedRecommendation.created_at >= now - within)
            .order_by(models.PersonalizedRecommendation.recommendation_score.desc(),
                      models.PersonalizedRecommendation.id.asc())
            .limit(limit)
            .all()
        )
        return [recommendation_to_record(r) for r in rows]

    def list_valid(self, user_id: str, limit: int = 10, now: Optional[datetime] = None) -> List[RecommendationRecord]:
        """Return unexpired records regardless of age, best score first."""
        now = now or self.clock()
        rows = (
            self._valid_query(user_id, now)
            .order_by(models.PersonalizedRecommendation.recommendation_score.desc(),
                      models.PersonalizedRecommendation.id.asc())
            .limit(limit)
            .all()
        )
        return [recommendation_to_record(r) for r in rows]

    def put(
        self,
        user_id: str,
        records: Sequence[RecommendationRecord],
        meal_type: Optional[str] = None,
        model_version: Optional[str] = None,
        now: Optional[datetime] = None,
        types: Optional[Sequence[str]] = None,
    ) -> List[RecommendationRecord]:
        """Replace the user's stored recommendations with ``records``.

        With ``types`` only stored records of those types are replaced;
        records of other types are kept.

        Every record is stamped ``created_at = now`` and
        ``expires_at = now + ttl``.

        Raises:
            DatabaseError: If clearing or inserting fails.
        """
        now = now or self.clock()
        rows = [
            models.PersonalizedRecommendation(
                user_id=user_id,
                type=rec.type,
                target_id=rec.target_id,
                recommendation_score=rec.score,
                nutritional_match=rec.nutritional_match,
                preference_match=rec.preference_match,
                health_goal_alignment=rec.health_goal_alignment,
                reasoning_factors=dump_list(rec.reasoning),
                nutritional_highlights=dump_list(rec.nutritional_highlights),
                cautionary_notes=dump_list(rec.cautionary_notes),
                recommendation_text=". ".join(rec.reasoning),
                recommended_for=meal_type,
                ai_model_version=model_version,
                created_at=now,
                expires_at=now + self.ttl,
            )
            for rec in records
        ]
        try:
            self._user_query(user_id, types).delete(synchronize_session=False)
            self.session.commit()
            if rows:
                self.create_many(rows)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Error storing recommendations for user %s: %s", user_id, exc)
            raise DatabaseError("Failed to store recommendations", operation="create") from exc
        logger.info("Stored %s recommendations for user %s", len(rows), user_id)
        return [recommendation_to_record(r) for r in rows]
