"""
User Models

Roles of the platform and the admin account model. Teacher and school
accounts live in their own modules; all three authenticate through the same
bearer-token scheme with the role carried in the token.
"""

from enum import Enum

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from masar.modules.shared.models import BaseModel


class UserRole(str, Enum):
    """User roles in the system."""

    ADMIN = "admin"
    SCHOOL = "school"
    TEACHER = "teacher"


class Admin(BaseModel):
    """Platform administrator account."""

    __tablename__ = "admins"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    full_name: Mapped[str | None] = mapped_column(String(200), nullable=True)

    def __repr__(self) -> str:
        return f"<Admin(id={self.id}, email={self.email})>"
