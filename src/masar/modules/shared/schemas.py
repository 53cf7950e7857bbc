"""
Shared Schemas

The API envelope and the camelCase base used by request/response bodies.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys; snake_case input is accepted too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every API response."""

    success: bool = True
    message: str | None = None
    data: T | None = None
