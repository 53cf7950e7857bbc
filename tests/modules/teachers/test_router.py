"""
Tests for the teacher directory router.
"""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from masar.core.auth import get_current_user
from masar.core.database import get_db
from masar.core.exceptions import MissingFieldError, NotFoundError
from masar.main import create_app
from masar.modules.shared.pagination import Pagination
from masar.modules.teachers import service
from masar.modules.teachers.models import Gender
from masar.modules.teachers.schemas import TeacherSummary, TeachersPage


@pytest.fixture
def app(mock_db):
    app = create_app()

    async def override_db():
        yield mock_db

    app.dependency_overrides[get_db] = override_db
    return app


def as_user(app, user):
    app.dependency_overrides[get_current_user] = lambda: user


def page_of(*teachers) -> TeachersPage:
    return TeachersPage(
        teachers=[TeacherSummary.model_validate(t) for t in teachers],
        pagination=Pagination.for_page(1, 10, len(teachers)),
    )


class TestListTeachers:
    def test_requires_authentication(self, app):
        response = TestClient(app).get("/api/teachers")
        assert response.status_code == 401

    def test_filters_are_forwarded(self, app, school_user, sample_teacher):
        as_user(app, school_user)

        with patch.object(
            service, "list_teachers", AsyncMock(return_value=page_of(sample_teacher))
        ) as list_teachers:
            response = TestClient(app).get(
                "/api/teachers",
                params={"stage": "secondary", "gender": "male", "workedInOmanBefore": "false"},
            )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["teachers"][0]["fullName"] == "Ahmed Hassan"
        assert "passwordHash" not in data["teachers"][0]
        assert data["pagination"] == {
            "currentPage": 1,
            "totalPages": 1,
            "totalItems": 1,
            "itemsPerPage": 10,
        }
        kwargs = list_teachers.await_args.kwargs
        assert kwargs["stage"] == "secondary"
        assert kwargs["gender"] == Gender.MALE
        assert kwargs["worked_in_oman_before"] is False

    def test_unknown_stage_is_400(self, app, school_user):
        as_user(app, school_user)
        response = TestClient(app).get("/api/teachers", params={"stage": "university"})
        assert response.status_code == 400


class TestSearchTeachers:
    def test_missing_specialty_is_400(self, app, school_user):
        as_user(app, school_user)

        with patch.object(
            service,
            "search_teachers",
            AsyncMock(side_effect=MissingFieldError("Specialty ID is required")),
        ):
            response = TestClient(app).get("/api/teachers/search")

        assert response.status_code == 400
        assert response.json()["error"] == "MISSING_FIELD"

    def test_search_by_specialty(self, app, school_user, sample_teacher, sample_specialty):
        as_user(app, school_user)

        with patch.object(
            service, "search_teachers", AsyncMock(return_value=page_of(sample_teacher))
        ) as search:
            response = TestClient(app).get(
                "/api/teachers/search",
                params={"specialtyId": str(sample_specialty.id), "q": "Ahm"},
            )

        assert response.status_code == 200
        assert search.await_args.kwargs["specialty_id"] == sample_specialty.id
        assert search.await_args.kwargs["name"] == "Ahm"


class TestProfiles:
    def test_me(self, app, teacher_user, sample_teacher):
        as_user(app, teacher_user)

        with patch.object(
            service, "get_current_teacher", AsyncMock(return_value=sample_teacher)
        ):
            response = TestClient(app).get("/api/teachers/me")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == str(sample_teacher.id)

    def test_me_as_school_is_403(self, app, school_user, mock_db):
        as_user(app, school_user)

        response = TestClient(app).get("/api/teachers/me")

        assert response.status_code == 403
        mock_db.execute.assert_not_awaited()

    def test_unknown_teacher_is_404(self, app, school_user):
        as_user(app, school_user)

        with patch.object(
            service, "get_teacher", AsyncMock(side_effect=NotFoundError("Teacher"))
        ):
            response = TestClient(app).get(f"/api/teachers/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["message"] == "Teacher not found"
