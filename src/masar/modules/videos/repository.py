"""
Video Repository

Find-or-replace storage of demo videos keyed on (teacher, specialty).
"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Video


async def get_by_id(db: AsyncSession, video_id: UUID) -> Video | None:
    result = await db.execute(
        select(Video).where(Video.id == video_id).execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_for_teacher_and_specialty(
    db: AsyncSession, teacher_id: UUID, specialty_id: UUID
) -> Video | None:
    result = await db.execute(
        select(Video).where(Video.teacher_id == teacher_id, Video.specialty_id == specialty_id)
    )
    return result.scalar_one_or_none()


async def upsert(
    db: AsyncSession,
    *,
    teacher_id: UUID,
    specialty_id: UUID,
    title: str,
    video_url: str,
) -> UUID:
    """
    Insert a video or overwrite the existing one for the same (teacher, specialty).

    Single INSERT ... ON CONFLICT DO UPDATE statement, so concurrent uploads
    for the same pair cannot produce two rows.

    Returns:
        ID of the stored video
    """
    stmt = insert(Video).values(
        teacher_id=teacher_id,
        specialty_id=specialty_id,
        title=title,
        video_url=video_url,
    )
    stmt = stmt.on_conflict_do_update(
        constraint="uq_videos_teacher_specialty",
        set_={
            "title": stmt.excluded.title,
            "video_url": stmt.excluded.video_url,
            "uploaded_at": func.now(),
            "updated_at": func.now(),
        },
    ).returning(Video.id)

    result = await db.execute(stmt)
    video_id = result.scalar_one()
    await db.commit()
    return video_id


async def list_for_teacher(db: AsyncSession, teacher_id: UUID) -> list[Video]:
    result = await db.execute(
        select(Video).where(Video.teacher_id == teacher_id).order_by(Video.uploaded_at.desc())
    )
    return list(result.scalars().all())
