"""Application settings loaded from the environment.

Values can be provided through a `.env` file at the project root. Database
URLs are read separately in `database.database`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the recommendation pipeline and HTTP layer."""

    llm_api_key: str = os.getenv("GROQ_API_KEY", "")
    llm_model: str = os.getenv("DIETARY_LLM_MODEL", "llama-3.3-70b-versatile")
    llm_timeout: float = float(os.getenv("DIETARY_LLM_TIMEOUT", "10"))
    llm_max_tokens: int = int(os.getenv("DIETARY_LLM_MAX_TOKENS", "1500"))
    llm_temperature: float = float(os.getenv("DIETARY_LLM_TEMPERATURE", "0.1"))
    cache_window_minutes: int = int(os.getenv("DIETARY_CACHE_WINDOW_MINUTES", "120"))
    recommendation_ttl_hours: int = int(os.getenv("DIETARY_RECOMMENDATION_TTL_HOURS", "24"))
    session_secret: str = os.getenv("SESSION_SECRET", "dietary-service-secret-change-in-production")
    trust_user_header: bool = _env_bool("TRUST_USER_HEADER")

    @property
    def cache_window(self) -> timedelta:
        return timedelta(minutes=self.cache_window_minutes)

    @property
    def recommendation_ttl(self) -> timedelta:
        return timedelta(hours=self.recommendation_ttl_hours)


settings = Settings()
