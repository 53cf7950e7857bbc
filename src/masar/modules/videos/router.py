"""
Video Router

Endpoints:
- POST /videos - Create or replace the caller's video for a specialty (teacher)
- GET /videos/teacher/{teacher_id} - List a teacher's videos (authenticated)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from masar.core.auth import CurrentUser, get_current_user, require_roles
from masar.core.config import Settings, get_settings
from masar.core.database import get_db
from masar.core.exceptions import ServiceError, internal_error
from masar.modules.shared.schemas import ApiResponse
from masar.modules.users.models import UserRole
from masar.modules.videos import service
from masar.modules.videos.schemas import VideoResponse, VideoUpsertRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[VideoResponse],
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
    summary="Upload or Replace a Demo Video",
    responses={
        200: {"description": "Existing video for the specialty was replaced"},
        201: {"description": "Video created"},
        403: {"description": "Not a teacher, or specialty not registered"},
        404: {"description": "Teacher or specialty not found"},
    },
)
async def upsert_video(
    data: VideoUpsertRequest,
    response: Response,
    user: CurrentUser = Depends(require_roles(UserRole.TEACHER)),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[VideoResponse]:
    try:
        video, created = await service.upsert_video(
            db,
            teacher_id=user.id,
            specialty_id=data.specialty_id,
            video_url=data.video_url,
            title=data.title,
            requester=user,
        )
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error uploading video: {e}")
        raise internal_error(e, settings.is_production) from e

    if not created:
        response.status_code = status.HTTP_200_OK

    return ApiResponse(
        message="Video uploaded successfully" if created else "Video replaced successfully",
        data=VideoResponse.model_validate(video),
    )


@router.get(
    "/teacher/{teacher_id}",
    response_model=ApiResponse[list[VideoResponse]],
    response_model_by_alias=True,
    summary="List a Teacher's Videos",
)
async def list_teacher_videos(
    teacher_id: UUID,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[list[VideoResponse]]:
    try:
        videos = await service.list_teacher_videos(db, teacher_id)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error listing videos for teacher {teacher_id}: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(data=[VideoResponse.model_validate(v) for v in videos])
