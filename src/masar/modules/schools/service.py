"""
School Directory Service
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from masar.core.exceptions import NotFoundError
from masar.modules.schools.models import School
from masar.modules.schools.repository import SchoolRepository
from masar.modules.schools.schemas import SchoolSummary, SchoolsPage
from masar.modules.shared.pagination import DEFAULT_PAGE, Pagination, check_page_bounds

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


async def list_schools(
    db: AsyncSession, *, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT
) -> SchoolsPage:
    """
    List schools newest first.

    Raises:
        InvalidInputError: If page < 1 or limit is outside 1..100
    """
    check_page_bounds(page, limit)

    schools, total = await SchoolRepository.list_schools(
        db, offset=(page - 1) * limit, limit=limit
    )
    return SchoolsPage(
        schools=[SchoolSummary.model_validate(s) for s in schools],
        pagination=Pagination.for_page(page, limit, total),
    )


async def get_school(db: AsyncSession, school_id: UUID) -> School:
    school = await SchoolRepository.get_by_id(db, school_id)
    if school is None:
        raise NotFoundError("School")
    return school
