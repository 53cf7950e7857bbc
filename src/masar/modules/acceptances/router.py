"""
Acceptance Router

Endpoints for the moderated acceptance workflow.

Endpoints:
- POST /acceptance/accept - School accepts a teacher (201, status pending)
- GET /acceptance/school - School lists its own acceptances
- GET /acceptance/all - Admin lists all acceptances (filters + pagination)
- PUT /acceptance/{acceptance_id}/status - Admin changes status/notes
- DELETE /acceptance/{acceptance_id} - Admin deletes an acceptance

Role checks live in the service so each operation reports its own message.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from masar.core.auth import CurrentUser, get_current_user
from masar.core.config import Settings, get_settings
from masar.core.database import get_db
from masar.core.exceptions import ServiceError, internal_error
from masar.modules.acceptances import service
from masar.modules.acceptances.models import AcceptanceStatus
from masar.modules.acceptances.schemas import (
    AcceptanceResponse,
    AcceptTeacherRequest,
    AdminAcceptancesResponse,
    SchoolAcceptancesResponse,
    UpdateAcceptanceStatusRequest,
)
from masar.modules.shared.pagination import DEFAULT_PAGE, MAX_LIMIT
from masar.modules.shared.schemas import ApiResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/accept",
    response_model=ApiResponse[AcceptanceResponse],
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
    summary="Accept a Teacher",
    description="""
Record that the calling school accepts a teacher. The acceptance starts as
**pending** and is moderated by an admin.

A school can accept a given teacher once. A repeated acceptance is rejected
with 400 and the existing record is returned in `data`.
""",
    responses={
        400: {"description": "Missing teacher id or already accepted"},
        403: {"description": "Caller is not a school"},
        404: {"description": "School or teacher not found"},
    },
)
async def accept_teacher(
    data: AcceptTeacherRequest,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[AcceptanceResponse]:
    try:
        acceptance = await service.accept_teacher(
            db, teacher_id=data.teacher_id, notes=data.notes, requester=user
        )
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error accepting teacher: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(
        message="Teacher accepted successfully",
        data=AcceptanceResponse.model_validate(acceptance),
    )


@router.get(
    "/school",
    response_model=ApiResponse[SchoolAcceptancesResponse],
    response_model_by_alias=True,
    summary="List My Acceptances",
)
async def list_school_acceptances(
    status_filter: AcceptanceStatus | None = Query(None, alias="status"),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[SchoolAcceptancesResponse]:
    try:
        result = await service.list_school_acceptances(db, requester=user, status=status_filter)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error listing acceptances for {user}: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(data=result)


@router.get(
    "/all",
    response_model=ApiResponse[AdminAcceptancesResponse],
    response_model_by_alias=True,
    summary="List All Acceptances",
)
async def list_all_acceptances(
    status_filter: AcceptanceStatus | None = Query(None, alias="status"),
    school_id: UUID | None = Query(None, alias="schoolId"),
    teacher_id: UUID | None = Query(None, alias="teacherId"),
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(service.DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[AdminAcceptancesResponse]:
    try:
        result = await service.admin_list_acceptances(
            db,
            requester=user,
            status=status_filter,
            school_id=school_id,
            teacher_id=teacher_id,
            page=page,
            limit=limit,
        )
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error listing all acceptances: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(data=result)


@router.put(
    "/{acceptance_id}/status",
    response_model=ApiResponse[AcceptanceResponse],
    response_model_by_alias=True,
    summary="Update Acceptance Status",
)
async def update_acceptance_status(
    acceptance_id: UUID,
    data: UpdateAcceptanceStatusRequest,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[AcceptanceResponse]:
    try:
        acceptance = await service.update_acceptance_status(
            db,
            acceptance_id=acceptance_id,
            status=data.status,
            notes=data.notes,
            requester=user,
        )
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error updating acceptance {acceptance_id}: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(
        message="Acceptance status updated successfully",
        data=AcceptanceResponse.model_validate(acceptance),
    )


@router.delete(
    "/{acceptance_id}",
    response_model=ApiResponse[None],
    summary="Delete an Acceptance",
)
async def delete_acceptance(
    acceptance_id: UUID,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[None]:
    try:
        await service.delete_acceptance(db, acceptance_id=acceptance_id, requester=user)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error deleting acceptance {acceptance_id}: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(message="Acceptance deleted successfully")
