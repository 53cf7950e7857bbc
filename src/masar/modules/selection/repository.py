"""
Selection Repository

Data access for school shortlists, plus the read-only queries that compare
shortlists against acceptance records.
"""

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from masar.modules.acceptances.models import Acceptance
from masar.modules.selection.models import SchoolSelection
from masar.modules.teachers.models import Teacher

logger = logging.getLogger(__name__)


async def add_selection(db: AsyncSession, school_id: UUID, teacher_id: UUID) -> bool:
    """
    Add a teacher to a school's shortlist if not already present.

    Returns:
        True if a row was inserted, False if the teacher was already selected
    """
    stmt = (
        insert(SchoolSelection)
        .values(school_id=school_id, teacher_id=teacher_id)
        .on_conflict_do_nothing(constraint="uq_school_selections_school_teacher")
        .returning(SchoolSelection.id)
    )
    result = await db.execute(stmt)
    inserted_id = result.scalar_one_or_none()
    await db.commit()
    return inserted_id is not None


async def remove_selection(db: AsyncSession, school_id: UUID, teacher_id: UUID) -> int:
    """
    Remove a teacher from a school's shortlist.

    Returns:
        Number of rows removed (0 when the teacher was not selected)
    """
    result = await db.execute(
        delete(SchoolSelection).where(
            SchoolSelection.school_id == school_id,
            SchoolSelection.teacher_id == teacher_id,
        )
    )
    await db.commit()
    return result.rowcount


async def list_selected_teachers(db: AsyncSession, school_id: UUID) -> list[Teacher]:
    """List the teachers a school has selected, in selection order."""
    result = await db.execute(
        select(Teacher)
        .join(SchoolSelection, SchoolSelection.teacher_id == Teacher.id)
        .where(SchoolSelection.school_id == school_id)
        .order_by(SchoolSelection.selected_at.asc(), SchoolSelection.id.asc())
    )
    return list(result.scalars().all())


async def list_selection_pairs(db: AsyncSession) -> set[tuple[UUID, UUID]]:
    result = await db.execute(select(SchoolSelection.school_id, SchoolSelection.teacher_id))
    return {(row.school_id, row.teacher_id) for row in result.all()}


async def list_acceptance_pairs(db: AsyncSession) -> set[tuple[UUID, UUID]]:
    result = await db.execute(select(Acceptance.school_id, Acceptance.teacher_id))
    return {(row.school_id, row.teacher_id) for row in result.all()}
