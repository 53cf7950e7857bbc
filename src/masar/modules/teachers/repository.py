"""
Teacher Repository

Teacher accounts, the directory listing and the specialty taxonomy.
"""

import logging
from collections.abc import Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from masar.modules.teachers.models import Gender, Specialty, Teacher

logger = logging.getLogger(__name__)


class TeacherRepository:
    """Repository for teacher database operations."""

    @staticmethod
    async def get_by_id(db: AsyncSession, teacher_id: UUID) -> Teacher | None:
        result = await db.execute(select(Teacher).where(Teacher.id == teacher_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_phone(db: AsyncSession, phone_number: str) -> Teacher | None:
        result = await db.execute(select(Teacher).where(Teacher.phone_number == phone_number))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_national_id(db: AsyncSession, national_id: str) -> Teacher | None:
        result = await db.execute(select(Teacher).where(Teacher.national_id == national_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        specialties: Sequence[Specialty],
        **fields: Any,
    ) -> Teacher:
        """
        Create and commit a teacher holding ``specialties``.

        Raises:
            IntegrityError: If the phone number or national ID is already taken
        """
        teacher = Teacher(**fields, specialties=list(specialties), videos=[])

        db.add(teacher)
        await db.commit()
        await db.refresh(teacher)

        logger.info(f"Created teacher: {teacher.id} - {teacher.full_name}")
        return teacher

    @staticmethod
    async def list_teachers(
        db: AsyncSession,
        *,
        specialty_id: UUID | None = None,
        stage: str | None = None,
        gender: Gender | None = None,
        worked_in_oman_before: bool | None = None,
        name: str | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[Teacher], int]:
        """
        List teachers matching every given filter, newest first.

        Returns:
            Tuple of (teachers for the page, total count matching the filters)
        """
        filters = []
        if specialty_id is not None:
            filters.append(Teacher.specialties.any(Specialty.id == specialty_id))
        if stage is not None:
            filters.append(Teacher.taught_stages.contains([stage]))
        if gender is not None:
            filters.append(Teacher.gender == gender)
        if worked_in_oman_before is not None:
            filters.append(Teacher.worked_in_oman_before.is_(worked_in_oman_before))
        if name:
            filters.append(Teacher.full_name.ilike(f"%{name}%"))

        count_result = await db.execute(select(func.count(Teacher.id)).where(*filters))
        total = count_result.scalar_one()

        result = await db.execute(
            select(Teacher)
            .where(*filters)
            .order_by(Teacher.created_at.desc(), Teacher.id)
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total


class SpecialtyRepository:
    """Repository for the specialty taxonomy."""

    @staticmethod
    async def get_by_id(db: AsyncSession, specialty_id: UUID) -> Specialty | None:
        return await db.get(Specialty, specialty_id)

    @staticmethod
    async def get_many(db: AsyncSession, specialty_ids: Sequence[UUID]) -> list[Specialty]:
        if not specialty_ids:
            return []
        result = await db.execute(select(Specialty).where(Specialty.id.in_(specialty_ids)))
        return list(result.scalars().all())

    @staticmethod
    async def get_by_name(
        db: AsyncSession, name: str, *, exclude_id: UUID | None = None
    ) -> Specialty | None:
        """Case-insensitive lookup by English name."""
        query = select(Specialty).where(func.lower(Specialty.name) == name.strip().lower())
        if exclude_id is not None:
            query = query.where(Specialty.id != exclude_id)
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def list_specialties(db: AsyncSession, *, active: bool | None = None) -> list[Specialty]:
        """List specialties ordered by Arabic name, then English name."""
        query = select(Specialty)
        if active is not None:
            query = query.where(Specialty.is_active.is_(active))
        result = await db.execute(
            query.order_by(Specialty.name_ar.asc().nulls_last(), Specialty.name)
        )
        return list(result.scalars().all())

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        name: str,
        name_ar: str | None = None,
        description: str | None = None,
        is_active: bool = True,
    ) -> Specialty:
        """
        Raises:
            IntegrityError: If the name is already taken
        """
        specialty = Specialty(
            name=name.strip(), name_ar=name_ar, description=description, is_active=is_active
        )

        db.add(specialty)
        await db.commit()
        await db.refresh(specialty)

        logger.info(f"Created specialty: {specialty.id} - {specialty.name}")
        return specialty

    @staticmethod
    async def update(db: AsyncSession, specialty: Specialty, **changes: Any) -> Specialty:
        """Apply the given column changes and commit. None values are skipped."""
        for field, value in changes.items():
            if value is not None:
                setattr(specialty, field, value)

        await db.commit()
        await db.refresh(specialty)
        return specialty

    @staticmethod
    async def delete(db: AsyncSession, specialty_id: UUID) -> bool:
        """
        Delete a specialty. Teacher registrations and videos for it are removed
        by the foreign key cascades.

        Returns:
            True if a row was deleted
        """
        result = await db.execute(delete(Specialty).where(Specialty.id == specialty_id))
        await db.commit()
        return result.rowcount > 0
