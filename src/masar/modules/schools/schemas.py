"""
School Schemas
"""

from uuid import UUID

from masar.modules.schools.models import FlightTicketProvision
from masar.modules.shared.pagination import Pagination
from masar.modules.shared.schemas import CamelModel


class SchoolRef(CamelModel):
    """Minimal school reference used in selection responses."""

    id: UUID
    name: str


class SchoolSummary(CamelModel):
    """School record without credentials."""

    id: UUID
    manager_name: str
    whatsapp_phone: str
    school_name: str
    school_location: str
    stages_needed: list[str] = []
    specialties_needed: list[str] = []
    expected_salary_range: str
    flight_ticket_provided: FlightTicketProvision
    housing_provided: bool
    housing_allowance: str | None = None


class SchoolsPage(CamelModel):
    schools: list[SchoolSummary]
    pagination: Pagination
