"""
Teacher Directory Service

Browsing and searching teacher profiles. Profiles never expose credentials;
the schemas used here carry no password field.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from masar.core.auth import CurrentUser
from masar.core.exceptions import ForbiddenError, MissingFieldError, NotFoundError
from masar.modules.shared.pagination import DEFAULT_PAGE, Pagination, check_page_bounds
from masar.modules.teachers.models import Gender, Teacher
from masar.modules.teachers.repository import SpecialtyRepository, TeacherRepository
from masar.modules.teachers.schemas import TeacherSummary, TeachersPage

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


async def list_teachers(
    db: AsyncSession,
    *,
    specialty_id: UUID | None = None,
    stage: str | None = None,
    gender: Gender | None = None,
    worked_in_oman_before: bool | None = None,
    name: str | None = None,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
) -> TeachersPage:
    """
    List teachers, newest first, filtered and paginated.

    Raises:
        InvalidInputError: If page < 1 or limit is outside 1..100
    """
    check_page_bounds(page, limit)

    teachers, total = await TeacherRepository.list_teachers(
        db,
        specialty_id=specialty_id,
        stage=stage,
        gender=gender,
        worked_in_oman_before=worked_in_oman_before,
        name=name,
        offset=(page - 1) * limit,
        limit=limit,
    )
    return TeachersPage(
        teachers=[TeacherSummary.model_validate(t) for t in teachers],
        pagination=Pagination.for_page(page, limit, total),
    )


async def search_teachers(
    db: AsyncSession,
    *,
    specialty_id: UUID | None,
    name: str | None = None,
    stage: str | None = None,
    gender: Gender | None = None,
    worked_in_oman_before: bool | None = None,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
) -> TeachersPage:
    """
    Find the teachers registered for a specialty.

    Raises:
        MissingFieldError: If specialty_id is absent
        NotFoundError: If the specialty does not exist
    """
    if specialty_id is None:
        raise MissingFieldError("Specialty ID is required")

    if await SpecialtyRepository.get_by_id(db, specialty_id) is None:
        raise NotFoundError("Specialty")

    return await list_teachers(
        db,
        specialty_id=specialty_id,
        name=name,
        stage=stage,
        gender=gender,
        worked_in_oman_before=worked_in_oman_before,
        page=page,
        limit=limit,
    )


async def get_teacher(db: AsyncSession, teacher_id: UUID) -> Teacher:
    teacher = await TeacherRepository.get_by_id(db, teacher_id)
    if teacher is None:
        raise NotFoundError("Teacher")
    return teacher


async def get_current_teacher(db: AsyncSession, requester: CurrentUser) -> Teacher:
    """
    Profile of the authenticated teacher.

    Raises:
        ForbiddenError: If the caller is not a teacher
        NotFoundError: If the account no longer exists
    """
    if not requester.is_teacher:
        raise ForbiddenError("Access denied. Only teachers can access this endpoint.")
    return await get_teacher(db, requester.id)
