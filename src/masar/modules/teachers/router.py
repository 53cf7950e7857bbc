"""
Teacher Router

Endpoints:
- GET /teachers - Browse teachers (filters + pagination)
- GET /teachers/search - Teachers registered for a specialty
- GET /teachers/me - The calling teacher's profile
- GET /teachers/{teacher_id} - One teacher's profile

All endpoints require authentication.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from masar.core.auth import CurrentUser, get_current_user
from masar.core.config import Settings, get_settings
from masar.core.database import get_db
from masar.core.exceptions import ServiceError, internal_error
from masar.modules.shared.pagination import DEFAULT_PAGE, MAX_LIMIT
from masar.modules.shared.schemas import ApiResponse
from masar.modules.teachers import service
from masar.modules.teachers.models import Gender, TaughtStage
from masar.modules.teachers.schemas import TeacherSummary, TeachersPage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[TeachersPage],
    response_model_by_alias=True,
    summary="List Teachers",
)
async def list_teachers(
    stage: TaughtStage | None = Query(None),
    gender: Gender | None = Query(None),
    worked_in_oman_before: bool | None = Query(None, alias="workedInOmanBefore"),
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(service.DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[TeachersPage]:
    try:
        result = await service.list_teachers(
            db,
            stage=stage.value if stage else None,
            gender=gender,
            worked_in_oman_before=worked_in_oman_before,
            page=page,
            limit=limit,
        )
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error listing teachers: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(data=result)


@router.get(
    "/search",
    response_model=ApiResponse[TeachersPage],
    response_model_by_alias=True,
    summary="Search Teachers by Specialty",
)
async def search_teachers(
    specialty_id: UUID | None = Query(None, alias="specialtyId"),
    q: str | None = Query(None, max_length=100, description="Part of the teacher's name"),
    stage: TaughtStage | None = Query(None),
    gender: Gender | None = Query(None),
    worked_in_oman_before: bool | None = Query(None, alias="workedInOmanBefore"),
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(service.DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[TeachersPage]:
    try:
        result = await service.search_teachers(
            db,
            specialty_id=specialty_id,
            name=q,
            stage=stage.value if stage else None,
            gender=gender,
            worked_in_oman_before=worked_in_oman_before,
            page=page,
            limit=limit,
        )
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error searching teachers: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(data=result)


@router.get(
    "/me",
    response_model=ApiResponse[TeacherSummary],
    response_model_by_alias=True,
    summary="My Teacher Profile",
)
async def get_my_profile(
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[TeacherSummary]:
    try:
        teacher = await service.get_current_teacher(db, user)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error loading profile for {user}: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(data=TeacherSummary.model_validate(teacher))


@router.get(
    "/{teacher_id}",
    response_model=ApiResponse[TeacherSummary],
    response_model_by_alias=True,
    summary="Get a Teacher",
)
async def get_teacher(
    teacher_id: UUID,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[TeacherSummary]:
    try:
        teacher = await service.get_teacher(db, teacher_id)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error loading teacher {teacher_id}: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(data=TeacherSummary.model_validate(teacher))
