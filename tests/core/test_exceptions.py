"""
Tests for the error envelope handlers.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from masar.core.exceptions import (
    ConflictError,
    NotFoundError,
    RateLimitExceededError,
    internal_error_message,
    register_exception_handlers,
)


def build_client(is_production: bool) -> TestClient:
    app = FastAPI()
    register_exception_handlers(app, is_production=is_production)

    @app.get("/conflict")
    async def conflict():
        raise ConflictError("Already there", data={"existing_id": "1"})

    @app.get("/missing")
    async def missing():
        raise NotFoundError("School")

    @app.get("/limited")
    async def limited():
        raise RateLimitExceededError(5, 60)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database exploded")

    @app.get("/items/{item_id}")
    async def item(item_id: int):
        return {"id": item_id}

    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def client():
    return build_client(is_production=False)


class TestEnvelope:
    def test_conflict_carries_data(self, client):
        response = client.get("/conflict")

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Already there",
            "error": "CONFLICT",
            "data": {"existing_id": "1"},
        }

    def test_not_found(self, client):
        response = client.get("/missing")

        assert response.status_code == 404
        assert response.json()["message"] == "School not found"

    def test_rate_limit_sets_retry_after(self, client):
        response = client.get("/limited")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "60"

    def test_validation_error_is_400(self, client):
        response = client.get("/items/abc")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["errors"][0]["field"] == "path.item_id"

    def test_unhandled_error_shows_message_outside_production(self, client):
        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json()["message"] == "database exploded"

    def test_unhandled_error_redacted_in_production(self):
        response = build_client(is_production=True).get("/boom")

        assert response.status_code == 500
        assert response.json()["message"] == "An unexpected error occurred."


class TestInternalErrorMessage:
    def test_empty_message_uses_class_name(self):
        assert internal_error_message(ValueError(), is_production=False) == "ValueError"
