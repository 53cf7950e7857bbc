"""
School Models

School accounts. The list of teachers a school has selected is stored in
the selection module's ``school_selections`` table.
"""

from enum import Enum

from sqlalchemy import Boolean, String, Text
from sqlalchemy.dialects.postgresql import ENUM, JSONB
from sqlalchemy.orm import Mapped, mapped_column

from masar.modules.shared.models import BaseModel


class FlightTicketProvision(str, Enum):
    FULL = "full"
    HALF = "half"
    NONE = "none"


class SchoolStage(str, Enum):
    """Stages a school is hiring for."""

    KINDERGARTEN = "kindergarten"
    STAGE_ONE = "stageOne"
    STAGE_TWO = "stageTwo"
    GRADE_10_TO_12 = "grade10to12"


class School(BaseModel):
    """School account. The WhatsApp phone number is globally unique."""

    __tablename__ = "schools"

    # Identity
    manager_name: Mapped[str] = mapped_column(String(200), nullable=False)
    whatsapp_phone: Mapped[str] = mapped_column(
        String(20), unique=True, index=True, nullable=False
    )
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)

    # Profile
    school_name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    school_location: Mapped[str] = mapped_column(String(300), nullable=False)
    stages_needed: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    specialties_needed: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    expected_salary_range: Mapped[str] = mapped_column(String(100), nullable=False)
    flight_ticket_provided: Mapped[FlightTicketProvision] = mapped_column(
        ENUM(
            FlightTicketProvision,
            name="flight_ticket_provision",
            create_type=True,
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
    )
    housing_provided: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    housing_allowance: Mapped[str | None] = mapped_column(String(100), nullable=True)

    def __repr__(self) -> str:
        return f"<School(id={self.id}, name={self.school_name})>"
