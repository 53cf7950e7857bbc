"""
Acceptance Models

Formal, admin-moderated acceptance of a teacher by a school.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Text, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import ENUM as PG_ENUM
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from masar.modules.shared.models import BaseModel

if TYPE_CHECKING:
    from masar.modules.schools.models import School
    from masar.modules.teachers.models import Teacher


class AcceptanceStatus(str, Enum):
    """
    Moderation state of an acceptance.

    Any state may move to any other; only admins change it.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class Acceptance(BaseModel):
    """A school's acceptance of a teacher, at most one per pair."""

    __tablename__ = "acceptances"

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
    accepted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    status: Mapped[AcceptanceStatus] = mapped_column(
        PG_ENUM(
            AcceptanceStatus,
            name="acceptance_status",
            create_type=True,
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
        default=AcceptanceStatus.PENDING,
        server_default=AcceptanceStatus.PENDING.value,
    )
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")

    school: Mapped["School"] = relationship("School", lazy="selectin")
    teacher: Mapped["Teacher"] = relationship("Teacher", lazy="selectin")

    __table_args__ = (
        UniqueConstraint("school_id", "teacher_id", name="uq_acceptances_school_teacher"),
        Index("ix_acceptances_status", "status"),
        Index("ix_acceptances_accepted_at", "accepted_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Acceptance(id={self.id}, school={self.school_id}, "
            f"teacher={self.teacher_id}, status={self.status})>"
        )
