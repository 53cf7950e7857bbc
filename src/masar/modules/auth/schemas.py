"""Authentication schemas."""

from uuid import UUID

from pydantic import EmailStr, Field

from masar.modules.schools.models import FlightTicketProvision, SchoolStage
from masar.modules.shared.schemas import CamelModel
from masar.modules.teachers.models import Gender, TaughtStage
from masar.modules.users.models import UserRole

# At least 8 digits, optional leading +, spaces and dashes allowed
PHONE_PATTERN = r"^\+?[\d\s-]{8,}$"
MIN_PASSWORD_LENGTH = 6


class TeacherLoginRequest(CamelModel):
    phone_number: str
    password: str


class SchoolLoginRequest(CamelModel):
    whatsapp_phone: str
    password: str


class AdminLoginRequest(CamelModel):
    email: EmailStr
    password: str


class TeacherRegisterRequest(CamelModel):
    """Request body for POST /auth/register/teacher."""

    full_name: str = Field(min_length=1, max_length=200)
    phone_number: str = Field(pattern=PHONE_PATTERN, max_length=20)
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    national_id: str = Field(min_length=1, max_length=50)
    gender: Gender
    age: int = Field(ge=18)
    address: str = Field(min_length=1)
    academic_qualification: str = Field(min_length=1, max_length=200)
    diploma: str | None = Field(default=None, max_length=200)
    courses: list[str] = []
    specialties: list[UUID] = Field(min_length=1)
    taught_stages: list[TaughtStage] = Field(min_length=1)
    worked_in_oman_before: bool


class SchoolRegisterRequest(CamelModel):
    """Request body for POST /auth/register/school."""

    manager_name: str = Field(min_length=1, max_length=200)
    whatsapp_phone: str = Field(pattern=PHONE_PATTERN, max_length=20)
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    school_name: str = Field(min_length=1, max_length=200)
    school_location: str = Field(min_length=1, max_length=300)
    stages_needed: list[SchoolStage] = Field(min_length=1)
    specialties_needed: list[str] = Field(min_length=1)
    expected_salary_range: str = Field(min_length=1, max_length=100)
    flight_ticket_provided: FlightTicketProvision
    housing_provided: bool
    housing_allowance: str | None = Field(default=None, max_length=100)


class AuthUser(CamelModel):
    """Identity returned alongside the tokens."""

    id: UUID
    role: UserRole
    name: str


class LoginResponse(CamelModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: AuthUser
