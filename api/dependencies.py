"""Request-scoped dependencies for the dietary endpoints.

The authenticated user is resolved here, before any handler runs. The
marketplace login flow stores the id in the signed session cookie; a trusted
gateway may forward it in ``X-User-Id`` instead when `TRUST_USER_HEADER` is
enabled.
"""

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session, sessionmaker

from core.config import Settings, settings
from core.exceptions import AuthenticationError
from database.deps import get_db_read, get_write_session_factory
from services.catalog_reader import CatalogReader
from services.llm_scorer import GroqRecommendationScorer
from services.recommendation_engine import DietaryRecommendationEngine

SESSION_USER_KEYS = ("user_id", "owner_id", "customer_id")


def get_settings() -> Settings:
    return settings


def _user_from_session(request: Request) -> Optional[str]:
    # request.session asserts when SessionMiddleware is not installed
    session = request.scope.get("session") or {}
    for key in SESSION_USER_KEYS:
        value = session.get(key)
        if value not in (None, ""):
            return str(value)
    return None


def get_current_user_id(request: Request, config: Settings = Depends(get_settings)) -> str:
    """Return the authenticated user's id or raise 401."""
    user_id = _user_from_session(request)
    if user_id is None and config.trust_user_header:
        header = request.headers.get("X-User-Id", "").strip()
        user_id = header or None
    if user_id is None:
        raise AuthenticationError()
    return user_id


def get_scorer(config: Settings = Depends(get_settings)) -> GroqRecommendationScorer:
    return GroqRecommendationScorer(config)


def get_recommendation_engine(
    session_factory: sessionmaker = Depends(get_write_session_factory),
    scorer=Depends(get_scorer),
    config: Settings = Depends(get_settings),
) -> DietaryRecommendationEngine:
    return DietaryRecommendationEngine(session_factory=session_factory, scorer=scorer, config=config)


def get_catalog_reader(db: Session = Depends(get_db_read)) -> CatalogReader:
    return CatalogReader(db)
