"""
School Router

Endpoints:
- GET /schools - Browse schools (pagination)
- GET /schools/{school_id} - One school's profile
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from masar.core.auth import CurrentUser, get_current_user
from masar.core.config import Settings, get_settings
from masar.core.database import get_db
from masar.core.exceptions import ServiceError, internal_error
from masar.modules.schools import service
from masar.modules.schools.schemas import SchoolSummary, SchoolsPage
from masar.modules.shared.pagination import DEFAULT_PAGE, MAX_LIMIT
from masar.modules.shared.schemas import ApiResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[SchoolsPage],
    response_model_by_alias=True,
    summary="List Schools",
)
async def list_schools(
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(service.DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[SchoolsPage]:
    try:
        result = await service.list_schools(db, page=page, limit=limit)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error listing schools: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(data=result)


@router.get(
    "/{school_id}",
    response_model=ApiResponse[SchoolSummary],
    response_model_by_alias=True,
    summary="Get a School",
)
async def get_school(
    school_id: UUID,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[SchoolSummary]:
    try:
        school = await service.get_school(db, school_id)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error loading school {school_id}: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(data=SchoolSummary.model_validate(school))
