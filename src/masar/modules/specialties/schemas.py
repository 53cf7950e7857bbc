"""
Specialty Schemas
"""

from uuid import UUID

from pydantic import Field

from masar.modules.shared.schemas import CamelModel


class SpecialtyCreateRequest(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    name_ar: str | None = Field(default=None, max_length=100)
    description: str | None = None
    is_active: bool = True


class SpecialtyUpdateRequest(CamelModel):
    """Fields left out are not changed."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    name_ar: str | None = Field(default=None, max_length=100)
    description: str | None = None
    is_active: bool | None = None


class SpecialtyResponse(CamelModel):
    id: UUID
    name: str
    name_ar: str | None = None
    description: str | None = None
    is_active: bool
