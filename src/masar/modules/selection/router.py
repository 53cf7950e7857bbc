"""
Selection Router

Endpoints for the school shortlist flow.

Endpoints:
- POST /selection/accept - Select a teacher for a school (school or admin)
- GET /selection/school/{school_id} - List a school's selected teachers
- DELETE /selection/remove - Remove a teacher from a school's selections
- GET /selection/reconciliation - Shortlist vs acceptance report (admin)

Selecting a teacher sends a WhatsApp message to the admin, so it is rate
limited per requester.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from masar.core.auth import CurrentUser, require_roles
from masar.core.config import Settings, get_settings
from masar.core.database import get_db
from masar.core.exceptions import ServiceError, internal_error
from masar.core.notifications import NotificationDispatcher, get_dispatcher
from masar.core.rate_limit import enforce_rate_limit
from masar.modules.selection import service
from masar.modules.selection.schemas import (
    ReconciliationReport,
    RemoveSelectionRequest,
    SchoolSelectionsResponse,
    SelectTeacherRequest,
    SelectTeacherResponse,
)
from masar.modules.shared.schemas import ApiResponse
from masar.modules.users.models import UserRole

logger = logging.getLogger(__name__)

router = APIRouter()

school_or_admin = require_roles(UserRole.SCHOOL, UserRole.ADMIN)


@router.post(
    "/accept",
    response_model=ApiResponse[SelectTeacherResponse],
    response_model_by_alias=True,
    summary="Select a Teacher",
    description="""
Add a teacher to a school's selected teachers and notify the admin on WhatsApp.

A teacher can be selected by a school only once; a repeated selection is
rejected with 400 and leaves the list unchanged. Schools may only select for
themselves; admins may select for any school.
""",
    responses={
        400: {"description": "Missing ids or teacher already selected"},
        403: {"description": "Requester may not act for this school"},
        404: {"description": "School or teacher not found"},
        429: {"description": "Too many selections"},
    },
)
async def select_teacher(
    data: SelectTeacherRequest,
    user: CurrentUser = Depends(school_or_admin),
    db: AsyncSession = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_dispatcher),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[SelectTeacherResponse]:
    await enforce_rate_limit(
        f"selection:accept:{user.id}",
        settings.selection_rate_limit,
        settings.selection_rate_window_seconds,
    )

    try:
        result = await service.select_teacher(
            db,
            notifier,
            school_id=data.school_id,
            teacher_id=data.teacher_id,
            video_id=data.video_id,
            requester=user,
        )
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error selecting teacher: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(message="Teacher selected successfully", data=result)


@router.get(
    "/school/{school_id}",
    response_model=ApiResponse[SchoolSelectionsResponse],
    response_model_by_alias=True,
    summary="List a School's Selected Teachers",
)
async def list_selections(
    school_id: UUID,
    user: CurrentUser = Depends(school_or_admin),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[SchoolSelectionsResponse]:
    try:
        result = await service.list_selections(db, school_id=school_id, requester=user)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error listing selections for school {school_id}: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(data=result)


@router.delete(
    "/remove",
    response_model=ApiResponse[None],
    summary="Remove a Teacher from Selections",
)
async def remove_selection(
    data: RemoveSelectionRequest,
    user: CurrentUser = Depends(school_or_admin),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[None]:
    try:
        await service.remove_selection(
            db, school_id=data.school_id, teacher_id=data.teacher_id, requester=user
        )
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error removing selection: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(message="Teacher removed from selections")


@router.get(
    "/reconciliation",
    response_model=ApiResponse[ReconciliationReport],
    response_model_by_alias=True,
    summary="Shortlist vs Acceptance Reconciliation",
)
async def reconciliation_report(
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[ReconciliationReport]:
    try:
        report = await service.build_reconciliation_report(db)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error building reconciliation report: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(data=report)
