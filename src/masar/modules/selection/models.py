"""
Selection Models

A school's shortlist of selected teachers, one row per (school, teacher).
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from masar.modules.shared.models import BaseModel


class SchoolSelection(BaseModel):
    """
    Membership of a teacher in a school's selected-teacher list.

    The unique constraint is what makes selection idempotent: the add is a
    single INSERT ... ON CONFLICT DO NOTHING, so two concurrent selections of
    the same teacher leave exactly one row.
    """

    __tablename__ = "school_selections"

    school_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("schools.id", ondelete="CASCADE"),
        nullable=False,
    )
    teacher_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("teachers.id", ondelete="CASCADE"),
        nullable=False,
    )
    selected_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("school_id", "teacher_id", name="uq_school_selections_school_teacher"),
        Index("ix_school_selections_school_selected_at", "school_id", "selected_at"),
    )

    def __repr__(self) -> str:
        return f"<SchoolSelection(school={self.school_id}, teacher={self.teacher_id})>"
