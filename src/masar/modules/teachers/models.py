"""
Teacher Models

Teacher accounts and the specialty taxonomy teachers register for.
"""

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.dialects.postgresql import ENUM as PG_ENUM
from sqlalchemy.orm import Mapped, mapped_column, relationship

from masar.core.database import Base
from masar.modules.shared.models import BaseModel

if TYPE_CHECKING:
    from masar.modules.videos.models import Video


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class TaughtStage(str, Enum):
    """Stages a teacher has taught."""

    KINDERGARTEN = "kindergarten"
    PRIMARY = "primary"
    PREPARATORY = "preparatory"
    SECONDARY = "secondary"


teacher_specialties = Table(
    "teacher_specialties",
    Base.metadata,
    Column(
        "teacher_id",
        UUID(as_uuid=True),
        ForeignKey("teachers.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "specialty_id",
        UUID(as_uuid=True),
        ForeignKey("specialties.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Specialty(BaseModel):
    """A teaching specialty (subject area)."""

    __tablename__ = "specialties"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    name_ar: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Specialty(id={self.id}, name={self.name})>"


class Teacher(BaseModel):
    """
    Teacher account.

    Phone number and national ID are globally unique. A teacher holds at most
    one video per registered specialty; that rule is enforced by the video
    catalog, not here.
    """

    __tablename__ = "teachers"

    # Identity
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(20), unique=True, index=True, nullable=False)
    national_id: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)

    # Profile
    gender: Mapped[Gender] = mapped_column(
        PG_ENUM(
            Gender,
            name="gender",
            create_type=True,
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
    )
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    academic_qualification: Mapped[str] = mapped_column(String(200), nullable=False)
    diploma: Mapped[str | None] = mapped_column(String(200), nullable=True)
    courses: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    taught_stages: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    worked_in_oman_before: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Relationships
    specialties: Mapped[list[Specialty]] = relationship(
        Specialty,
        secondary=teacher_specialties,
        lazy="selectin",
    )
    videos: Mapped[list["Video"]] = relationship(
        "Video",
        back_populates="teacher",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (CheckConstraint("age >= 18", name="ck_teachers_age_adult"),)

    def __repr__(self) -> str:
        return f"<Teacher(id={self.id}, name={self.full_name})>"

    def has_specialty(self, specialty_id) -> bool:
        """Whether ``specialty_id`` is one of the teacher's registered specialties."""
        return any(str(s.id) == str(specialty_id) for s in self.specialties)
