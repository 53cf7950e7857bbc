"""
Tests for the video router.
"""

from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from masar.core.auth import get_current_user
from masar.core.database import get_db
from masar.main import create_app
from masar.modules.videos import service


@pytest.fixture
def app(mock_db):
    app = create_app()

    async def override_db():
        yield mock_db

    app.dependency_overrides[get_db] = override_db
    return app


@pytest.fixture
def video(sample_teacher, sample_specialty):
    return SimpleNamespace(
        id=uuid4(),
        teacher_id=sample_teacher.id,
        specialty_id=sample_specialty.id,
        title="Algebra demo",
        video_url="https://cdn.example.com/algebra.mp4",
        uploaded_at=datetime.now(UTC),
    )


class TestUpsertEndpoint:
    @pytest.mark.parametrize(
        ("created", "status_code", "message"),
        [
            (True, 201, "Video uploaded successfully"),
            (False, 200, "Video replaced successfully"),
        ],
    )
    def test_status_reflects_create_or_replace(
        self, app, teacher_user, video, created, status_code, message
    ):
        app.dependency_overrides[get_current_user] = lambda: teacher_user

        with patch.object(
            service, "upsert_video", AsyncMock(return_value=(video, created))
        ) as mock_upsert:
            response = TestClient(app).post(
                "/api/videos",
                json={"specialtyId": str(video.specialty_id), "videoUrl": video.video_url},
            )

        assert response.status_code == status_code
        assert response.json()["message"] == message
        assert response.json()["data"]["videoUrl"] == video.video_url
        assert mock_upsert.call_args.kwargs["teacher_id"] == teacher_user.id

    def test_school_cannot_upload(self, app, school_user):
        app.dependency_overrides[get_current_user] = lambda: school_user

        response = TestClient(app).post("/api/videos", json={})

        assert response.status_code == 403


class TestListEndpoint:
    def test_lists_for_any_authenticated_user(self, app, school_user, video):
        app.dependency_overrides[get_current_user] = lambda: school_user

        with patch.object(service, "list_teacher_videos", AsyncMock(return_value=[video])):
            response = TestClient(app).get(f"/api/videos/teacher/{video.teacher_id}")

        assert response.status_code == 200
        assert response.json()["data"][0]["title"] == "Algebra demo"

    def test_unexpected_error_is_500_envelope(self, app, school_user):
        app.dependency_overrides[get_current_user] = lambda: school_user

        with patch.object(
            service, "list_teacher_videos", AsyncMock(side_effect=RuntimeError("boom"))
        ):
            response = TestClient(app).get(f"/api/videos/teacher/{uuid4()}")

        assert response.status_code == 500
        assert response.json()["error"] == "INTERNAL_ERROR"
