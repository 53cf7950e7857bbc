"""
Video Service Layer

Ownership gate for demo videos: a teacher may only file a video under a
specialty they are registered for, and holds at most one video per specialty.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from masar.core.auth import CurrentUser
from masar.core.exceptions import ForbiddenError, MissingFieldError, NotFoundError
from masar.modules.teachers.repository import SpecialtyRepository, TeacherRepository
from masar.modules.videos import repository
from masar.modules.videos.models import Video

logger = logging.getLogger(__name__)


def default_video_title(specialty_name: str, specialty_name_ar: str | None, teacher_name: str) -> str:
    """Title used when the teacher does not provide one."""
    return f"{specialty_name_ar or specialty_name} - {teacher_name}"


async def upsert_video(
    db: AsyncSession,
    *,
    teacher_id: UUID,
    specialty_id: UUID | None,
    video_url: str | None,
    requester: CurrentUser,
    title: str | None = None,
) -> tuple[Video, bool]:
    """
    Create or replace the teacher's video for a specialty.

    Returns:
        Tuple of (stored video, True if newly created)

    Raises:
        ForbiddenError: If the requester is not the teacher, or the specialty
            is not one of the teacher's registered specialties
        MissingFieldError: If specialty_id or video_url is absent
        NotFoundError: If the teacher or specialty does not exist
    """
    if not requester.is_teacher or requester.id != teacher_id:
        raise ForbiddenError("You can only upload videos for your own profile")

    if specialty_id is None or not video_url:
        raise MissingFieldError("Specialty ID and video URL are required")

    teacher = await TeacherRepository.get_by_id(db, teacher_id)
    if teacher is None:
        raise NotFoundError("Teacher")

    specialty = await SpecialtyRepository.get_by_id(db, specialty_id)
    if specialty is None:
        raise NotFoundError("Specialty")

    if not teacher.has_specialty(specialty_id):
        logger.warning(
            f"Teacher {teacher_id} tried to upload a video for unregistered specialty {specialty_id}"
        )
        raise ForbiddenError("You can only upload videos for your registered specialties")

    existing = await repository.get_for_teacher_and_specialty(db, teacher_id, specialty_id)

    video_id = await repository.upsert(
        db,
        teacher_id=teacher_id,
        specialty_id=specialty_id,
        title=title or default_video_title(specialty.name, specialty.name_ar, teacher.full_name),
        video_url=video_url,
    )
    video = await repository.get_by_id(db, video_id)

    created = existing is None
    logger.info(
        f"Video {'uploaded' if created else 'replaced'}: id={video_id}, "
        f"teacher={teacher_id}, specialty={specialty_id}"
    )
    return video, created


async def list_teacher_videos(db: AsyncSession, teacher_id: UUID) -> list[Video]:
    """
    List a teacher's videos, newest first.

    Raises:
        NotFoundError: If the teacher does not exist
    """
    teacher = await TeacherRepository.get_by_id(db, teacher_id)
    if teacher is None:
        raise NotFoundError("Teacher")
    return await repository.list_for_teacher(db, teacher_id)
