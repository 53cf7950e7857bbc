"""
Acceptance Repository

Data access for acceptance records. Creation is a single
INSERT ... ON CONFLICT DO NOTHING so duplicate acceptances of the same
(school, teacher) pair cannot be created by concurrent requests.
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from masar.modules.acceptances.models import Acceptance, AcceptanceStatus

logger = logging.getLogger(__name__)


async def create_if_absent(
    db: AsyncSession, school_id: UUID, teacher_id: UUID, notes: str = ""
) -> UUID | None:
    """
    Create a pending acceptance unless one exists for the pair.

    Returns:
        ID of the new acceptance, or None if one already existed
    """
    stmt = (
        insert(Acceptance)
        .values(
            school_id=school_id,
            teacher_id=teacher_id,
            status=AcceptanceStatus.PENDING,
            notes=notes,
        )
        .on_conflict_do_nothing(constraint="uq_acceptances_school_teacher")
        .returning(Acceptance.id)
    )
    result = await db.execute(stmt)
    acceptance_id = result.scalar_one_or_none()
    await db.commit()
    return acceptance_id


async def get_by_id(db: AsyncSession, acceptance_id: UUID) -> Acceptance | None:
    result = await db.execute(
        select(Acceptance)
        .where(Acceptance.id == acceptance_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_by_pair(db: AsyncSession, school_id: UUID, teacher_id: UUID) -> Acceptance | None:
    result = await db.execute(
        select(Acceptance).where(
            Acceptance.school_id == school_id,
            Acceptance.teacher_id == teacher_id,
        )
    )
    return result.scalar_one_or_none()


async def list_for_school(
    db: AsyncSession, school_id: UUID, status: AcceptanceStatus | None = None
) -> list[Acceptance]:
    """List a school's acceptances, newest first."""
    query = select(Acceptance).where(Acceptance.school_id == school_id)
    if status is not None:
        query = query.where(Acceptance.status == status)
    query = query.order_by(Acceptance.accepted_at.desc(), Acceptance.id)

    result = await db.execute(query)
    return list(result.scalars().all())


async def list_for_admin(
    db: AsyncSession,
    *,
    status: AcceptanceStatus | None = None,
    school_id: UUID | None = None,
    teacher_id: UUID | None = None,
    offset: int = 0,
    limit: int = 20,
) -> tuple[list[Acceptance], int]:
    """
    List acceptances with optional filters and offset pagination.

    Returns:
        Tuple of (acceptances for the page, total count matching the filters)
    """
    filters = []
    if status is not None:
        filters.append(Acceptance.status == status)
    if school_id is not None:
        filters.append(Acceptance.school_id == school_id)
    if teacher_id is not None:
        filters.append(Acceptance.teacher_id == teacher_id)

    count_result = await db.execute(select(func.count(Acceptance.id)).where(*filters))
    total = count_result.scalar_one()

    result = await db.execute(
        select(Acceptance)
        .where(*filters)
        .order_by(Acceptance.accepted_at.desc(), Acceptance.id)
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all()), total


async def update_status(
    db: AsyncSession,
    acceptance: Acceptance,
    status: AcceptanceStatus,
    notes: str | None = None,
) -> Acceptance:
    """Set the status, and the notes when given, then commit."""
    acceptance.status = status
    if notes is not None:
        acceptance.notes = notes

    await db.commit()
    await db.refresh(acceptance)
    return acceptance


async def delete(db: AsyncSession, acceptance: Acceptance) -> None:
    await db.delete(acceptance)
    await db.commit()
