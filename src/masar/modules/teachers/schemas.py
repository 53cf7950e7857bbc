"""
Teacher Schemas

Public teacher representations. Credentials are never part of them.
"""

from datetime import datetime
from uuid import UUID

from masar.modules.shared.pagination import Pagination
from masar.modules.shared.schemas import CamelModel
from masar.modules.teachers.models import Gender


class SpecialtySummary(CamelModel):
    id: UUID
    name: str
    name_ar: str | None = None


class TeacherVideoSummary(CamelModel):
    id: UUID
    specialty_id: UUID
    title: str
    video_url: str
    uploaded_at: datetime


class TeacherSummary(CamelModel):
    """Teacher record as exposed to schools and admins."""

    id: UUID
    full_name: str
    phone_number: str
    national_id: str
    gender: Gender
    age: int
    address: str
    academic_qualification: str
    diploma: str | None = None
    courses: list[str] = []
    taught_stages: list[str] = []
    worked_in_oman_before: bool
    specialties: list[SpecialtySummary] = []
    videos: list[TeacherVideoSummary] = []


class TeacherRef(CamelModel):
    """Minimal teacher reference used in selection responses."""

    id: UUID
    name: str


class TeachersPage(CamelModel):
    teachers: list[TeacherSummary]
    pagination: Pagination
