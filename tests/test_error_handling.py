"""Test error handling functionality.

Verifies that custom exceptions carry the right status codes and that the
registered handlers render them in the shared error envelope.
"""
import json

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from core.error_handlers import create_error_response, register_exception_handlers
from core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    DatabaseError,
    NotFoundError,
    RecommendationGenerationError,
    ValidationError,
)


@pytest.fixture
def error_app():
    """Small app whose routes raise each kind of error."""
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/not-found")
    def not_found():
        raise NotFoundError("Restaurant", 42)

    @app.get("/generation")
    def generation():
        raise RecommendationGenerationError("provider error: TimeoutError")

    @app.get("/database")
    def database():
        raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

    @app.get("/unexpected")
    def unexpected():
        raise KeyError("surprise")

    return TestClient(app, raise_server_exceptions=False)


def test_exception_classes_have_proper_attributes():
    """Test that custom exception classes have expected attributes."""
    exc = NotFoundError("DietaryProfile", "user-1")
    assert exc.status_code == 404
    assert "DietaryProfile" in exc.message
    assert "user-1" in exc.message

    exc = ValidationError("Invalid input", field="age")
    assert exc.status_code == 400
    assert exc.message == "Invalid input"
    assert exc.details == {"field": "age"}

    exc = AuthenticationError()
    assert exc.status_code == 401
    assert exc.message == "Unauthorized"

    exc = DatabaseError("Failed to record meal history", operation="create")
    assert exc.status_code == 500
    assert exc.details == {"operation": "create"}

    exc = RecommendationGenerationError()
    assert exc.message == "Failed to generate recommendations"
    assert exc.details == {}

    exc = ConfigurationError("Missing key", config_key="GROQ_API_KEY")
    assert exc.details == {"config_key": "GROQ_API_KEY"}


def test_error_response_omits_empty_details():
    body = json.loads(create_error_response("Nope", status_code=404).body)
    assert body == {"error": {"message": "Nope", "status_code": 404}}


def test_app_exception_is_rendered_with_its_status(error_app):
    res = error_app.get("/not-found")
    assert res.status_code == 404
    assert res.json()["error"]["details"] == {"resource": "Restaurant", "id": 42}


def test_generation_error_keeps_stable_message(error_app):
    res = error_app.get("/generation")
    assert res.status_code == 500
    assert res.json()["error"] == {
        "message": "Failed to generate recommendations",
        "status_code": 500,
        "details": {"reason": "provider error: TimeoutError"},
    }


def test_database_errors_are_hidden(error_app):
    res = error_app.get("/database")
    assert res.status_code == 500
    assert res.json()["error"]["message"] == "A database error occurred"
    assert "disk" not in res.text


def test_unexpected_errors_become_500(error_app):
    res = error_app.get("/unexpected")
    assert res.status_code == 500
    assert res.json()["error"]["details"] == {"type": "internal_error"}
