"""
Selection Schemas
"""

from uuid import UUID

from masar.modules.schools.schemas import SchoolRef
from masar.modules.shared.schemas import CamelModel
from masar.modules.teachers.schemas import TeacherRef, TeacherSummary


class SelectTeacherRequest(CamelModel):
    """
    Request body for POST /selection/accept.

    Ids are optional here so that their absence is reported as a missing
    field rather than a schema validation error.
    """

    school_id: UUID | None = None
    teacher_id: UUID | None = None
    video_id: UUID | None = None


class RemoveSelectionRequest(CamelModel):
    school_id: UUID | None = None
    teacher_id: UUID | None = None


class SelectTeacherResponse(CamelModel):
    school: SchoolRef
    teacher: TeacherRef
    video_id: UUID | None = None


class SchoolSelectionsResponse(CamelModel):
    school: SchoolRef
    selected_teachers: list[TeacherSummary]


class SelectionPair(CamelModel):
    school_id: UUID
    teacher_id: UUID


class ReconciliationReport(CamelModel):
    """Divergence between school shortlists and acceptance records."""

    shortlist_only: list[SelectionPair]
    acceptance_only: list[SelectionPair]
    in_both: int
