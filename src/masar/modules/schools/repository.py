"""
School Repository

School accounts and the school directory.
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from masar.modules.schools.models import School

logger = logging.getLogger(__name__)


class SchoolRepository:
    """Repository for school database operations."""

    @staticmethod
    async def get_by_id(db: AsyncSession, school_id: UUID) -> School | None:
        """
        Get a school by ID.

        Args:
            db: Database session
            school_id: School UUID

        Returns:
            School instance or None if not found
        """
        return await db.get(School, school_id)

    @staticmethod
    async def get_by_whatsapp_phone(db: AsyncSession, whatsapp_phone: str) -> School | None:
        """
        Get a school by its WhatsApp phone number (unique login key).
        """
        result = await db.execute(select(School).where(School.whatsapp_phone == whatsapp_phone))
        return result.scalar_one_or_none()

    @staticmethod
    async def create(db: AsyncSession, **fields: Any) -> School:
        """
        Create and commit a school account.

        Raises:
            IntegrityError: If the WhatsApp phone is already registered
        """
        school = School(**fields)

        db.add(school)
        await db.commit()
        await db.refresh(school)

        logger.info(f"Created school: {school.id} - {school.school_name}")
        return school

    @staticmethod
    async def list_schools(
        db: AsyncSession, *, offset: int = 0, limit: int = 10
    ) -> tuple[list[School], int]:
        """List schools newest first, with the total count."""
        count_result = await db.execute(select(func.count(School.id)))
        total = count_result.scalar_one()

        result = await db.execute(
            select(School).order_by(School.created_at.desc(), School.id).offset(offset).limit(limit)
        )
        return list(result.scalars().all()), total
