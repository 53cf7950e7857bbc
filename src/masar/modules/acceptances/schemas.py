"""
Acceptance Schemas
"""

from datetime import datetime
from uuid import UUID

from masar.modules.acceptances.models import AcceptanceStatus
from masar.modules.schools.schemas import SchoolSummary
from masar.modules.shared.pagination import Pagination
from masar.modules.shared.schemas import CamelModel
from masar.modules.teachers.schemas import TeacherSummary


class AcceptTeacherRequest(CamelModel):
    """Request body for POST /acceptance/accept."""

    teacher_id: UUID | None = None
    notes: str | None = None


class UpdateAcceptanceStatusRequest(CamelModel):
    """
    Request body for PUT /acceptance/{id}/status.

    status is a plain string so that values outside the domain are rejected
    by the service with its own message.
    """

    status: str | None = None
    notes: str | None = None


class AcceptanceResponse(CamelModel):
    """Acceptance with its school and teacher populated."""

    id: UUID
    school_id: UUID
    teacher_id: UUID
    status: AcceptanceStatus
    notes: str = ""
    accepted_at: datetime
    school: SchoolSummary | None = None
    teacher: TeacherSummary | None = None


class SchoolAcceptancesResponse(CamelModel):
    count: int
    acceptances: list[AcceptanceResponse]


class AdminAcceptancesResponse(CamelModel):
    acceptances: list[AcceptanceResponse]
    pagination: Pagination
