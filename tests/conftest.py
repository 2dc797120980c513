"""Shared fixtures: a seeded scratch SQLite database, a fake scorer and an API client."""

import json
import time
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from api.dependencies import get_scorer, get_settings
from core.config import Settings
from database import seed_catalog
from database.deps import get_read_session_factory, get_write_session_factory
from database.models import Base
from main import app

NOW = datetime(2026, 3, 14, 12, 0, 0)
USER_ID = "user-42"
AUTH = {"X-User-Id": USER_ID}

# seeded catalog ids (see data/catalog_dataset.py)
GREEN_BOWL_ID = 1
TRATTORIA_ID = 2
SPICE_ROUTE_ID = 3
SEA_BASS_ID = 5


def default_payload():
    return {
        "recommendations": [
            {
                "type": "restaurant",
                "targetId": SPICE_ROUTE_ID,
                "score": 0.6,
                "reasoning": ["Plenty of vegan curries"],
                "nutritionalHighlights": ["High fibre"],
                "nutritionalMatch": 0.6,
                "preferenceMatch": 0.7,
                "healthGoalAlignment": 0.5,
            },
            {
                "type": "restaurant",
                "targetId": GREEN_BOWL_ID,
                "score": 0.9,
                "reasoning": ["Health-focused menu"],
                "nutritionalHighlights": ["Balanced macros"],
                "nutritionalMatch": 0.9,
                "preferenceMatch": 0.8,
                "healthGoalAlignment": 0.9,
            },
            {
                "type": "menu_item",
                "targetId": SEA_BASS_ID,
                "score": 0.8,
                "reasoning": ["Lean protein"],
                "nutritionalHighlights": ["Omega-3"],
                "cautionaryNotes": ["Contains fish"],
                "nutritionalMatch": 0.85,
                "preferenceMatch": 0.6,
                "healthGoalAlignment": 0.8,
            },
        ]
    }


class FakeScorer:
    """Stands in for the Groq scorer; records every call it receives."""

    model_version = "fake-model"

    def __init__(self):
        self.payload = default_payload()
        self.error = None
        self.delay = 0.0
        self.calls = []

    def complete(self, system_prompt, user_prompt):
        self.calls.append((system_prompt, user_prompt))
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.payload if isinstance(self.payload, str) else json.dumps(self.payload)


class Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'dietary.db'}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine)
    session = factory()
    try:
        seed_catalog(session)
    finally:
        session.close()
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_scorer():
    return FakeScorer()


@pytest.fixture
def clock():
    return Clock(NOW)


@pytest.fixture
def test_settings():
    return Settings(llm_api_key="test-key", trust_user_header=True)


@pytest.fixture
def client(session_factory, fake_scorer, test_settings):
    app.dependency_overrides[get_write_session_factory] = lambda: session_factory
    app.dependency_overrides[get_read_session_factory] = lambda: session_factory
    app.dependency_overrides[get_scorer] = lambda: fake_scorer
    app.dependency_overrides[get_settings] = lambda: test_settings
    # no context manager: the lifespan would initialize the real database
    yield TestClient(app)
    app.dependency_overrides.clear()
