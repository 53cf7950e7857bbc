"""
Shared fixtures: mocked sessions, requesters and directory records.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

import masar.models  # noqa: F401
from masar.core.auth import CurrentUser
from masar.core.rate_limit import reset_memory_store
from masar.modules.schools.models import FlightTicketProvision, School
from masar.modules.teachers.models import Gender, Specialty, Teacher
from masar.modules.users.models import UserRole


@pytest.fixture(autouse=True)
def _clear_rate_limits():
    reset_memory_store()
    yield
    reset_memory_store()


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.refresh = AsyncMock()
    db.get = AsyncMock()
    db.execute = AsyncMock()
    db.delete = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def sample_specialty():
    specialty = MagicMock(spec=Specialty)
    specialty.id = uuid4()
    specialty.name = "Mathematics"
    specialty.name_ar = "رياضيات"
    specialty.description = None
    specialty.is_active = True
    return specialty


@pytest.fixture
def sample_teacher(sample_specialty):
    teacher = MagicMock(spec=Teacher)
    teacher.id = uuid4()
    teacher.full_name = "Ahmed Hassan"
    teacher.phone_number = "+201001234567"
    teacher.national_id = "29001011234567"
    teacher.password_hash = "hashed"
    teacher.gender = Gender.MALE
    teacher.age = 34
    teacher.address = "Cairo"
    teacher.academic_qualification = "BSc Mathematics"
    teacher.diploma = None
    teacher.courses = ["TEFL"]
    teacher.taught_stages = ["secondary"]
    teacher.worked_in_oman_before = False
    teacher.specialties = [sample_specialty]
    teacher.videos = []
    teacher.has_specialty = lambda specialty_id: specialty_id == sample_specialty.id
    return teacher


@pytest.fixture
def sample_school():
    school = MagicMock(spec=School)
    school.id = uuid4()
    school.manager_name = "Salim Al Harthy"
    school.whatsapp_phone = "+96891234567"
    school.password_hash = "hashed"
    school.school_name = "Muscat International School"
    school.school_location = "Muscat"
    school.stages_needed = ["stageOne"]
    school.specialties_needed = ["Mathematics"]
    school.expected_salary_range = "600-800 OMR"
    school.flight_ticket_provided = FlightTicketProvision.FULL
    school.housing_provided = True
    school.housing_allowance = None
    school.created_at = datetime.now(UTC)
    return school


@pytest.fixture
def admin_user():
    return CurrentUser(id=uuid4(), role=UserRole.ADMIN, name="Admin")


@pytest.fixture
def school_user(sample_school):
    """Requester authenticated as ``sample_school``."""
    return CurrentUser(id=sample_school.id, role=UserRole.SCHOOL, name=sample_school.school_name)


@pytest.fixture
def other_school_user():
    return CurrentUser(id=uuid4(), role=UserRole.SCHOOL, name="Another School")


@pytest.fixture
def teacher_user(sample_teacher):
    """Requester authenticated as ``sample_teacher``."""
    return CurrentUser(id=sample_teacher.id, role=UserRole.TEACHER, name=sample_teacher.full_name)
