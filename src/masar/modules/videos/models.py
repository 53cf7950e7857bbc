"""
Video Models

Demo videos. A teacher holds at most one video per specialty.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from masar.modules.shared.models import BaseModel

if TYPE_CHECKING:
    from masar.modules.teachers.models import Specialty, Teacher


class Video(BaseModel):
    """A teacher's demo video for one of their specialties."""

    __tablename__ = "videos"

    teacher_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("teachers.id", ondelete="CASCADE"),
        nullable=False,
    )
    specialty_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("specialties.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    video_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    teacher: Mapped["Teacher"] = relationship("Teacher", back_populates="videos")
    specialty: Mapped["Specialty"] = relationship("Specialty", lazy="selectin")

    __table_args__ = (
        UniqueConstraint("teacher_id", "specialty_id", name="uq_videos_teacher_specialty"),
        Index("ix_videos_teacher_id", "teacher_id"),
        Index("ix_videos_uploaded_at", "uploaded_at"),
    )

    def __repr__(self) -> str:
        return f"<Video(id={self.id}, teacher={self.teacher_id}, specialty={self.specialty_id})>"
