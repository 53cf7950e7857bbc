"""
Specialty Router

Endpoints:
- GET /specialties - List specialties, optionally by active flag (public)
- GET /specialties/{specialty_id} - One specialty (public)
- POST /specialties - Create a specialty (admin)
- PUT /specialties/{specialty_id} - Update a specialty (admin)
- DELETE /specialties/{specialty_id} - Delete a specialty (admin)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from masar.core.auth import CurrentUser, require_roles
from masar.core.config import Settings, get_settings
from masar.core.database import get_db
from masar.core.exceptions import ServiceError, internal_error
from masar.modules.shared.schemas import ApiResponse
from masar.modules.specialties import service
from masar.modules.specialties.schemas import (
    SpecialtyCreateRequest,
    SpecialtyResponse,
    SpecialtyUpdateRequest,
)
from masar.modules.users.models import UserRole

logger = logging.getLogger(__name__)

router = APIRouter()

admin_only = require_roles(UserRole.ADMIN)


@router.get(
    "",
    response_model=ApiResponse[list[SpecialtyResponse]],
    response_model_by_alias=True,
    summary="List Specialties",
)
async def list_specialties(
    active: bool | None = Query(None),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[list[SpecialtyResponse]]:
    try:
        specialties = await service.list_specialties(db, active=active)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error listing specialties: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(data=[SpecialtyResponse.model_validate(s) for s in specialties])


@router.get(
    "/{specialty_id}",
    response_model=ApiResponse[SpecialtyResponse],
    response_model_by_alias=True,
    summary="Get a Specialty",
)
async def get_specialty(
    specialty_id: UUID,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[SpecialtyResponse]:
    try:
        specialty = await service.get_specialty(db, specialty_id)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error loading specialty {specialty_id}: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(data=SpecialtyResponse.model_validate(specialty))


@router.post(
    "",
    response_model=ApiResponse[SpecialtyResponse],
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a Specialty",
    responses={400: {"description": "Name missing or already used"}},
)
async def create_specialty(
    data: SpecialtyCreateRequest,
    user: CurrentUser = Depends(admin_only),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[SpecialtyResponse]:
    try:
        specialty = await service.create_specialty(db, data, requester=user)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error creating specialty: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(
        message="Specialty created successfully",
        data=SpecialtyResponse.model_validate(specialty),
    )


@router.put(
    "/{specialty_id}",
    response_model=ApiResponse[SpecialtyResponse],
    response_model_by_alias=True,
    summary="Update a Specialty",
)
async def update_specialty(
    specialty_id: UUID,
    data: SpecialtyUpdateRequest,
    user: CurrentUser = Depends(admin_only),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[SpecialtyResponse]:
    try:
        specialty = await service.update_specialty(db, specialty_id, data, requester=user)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error updating specialty {specialty_id}: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(
        message="Specialty updated successfully",
        data=SpecialtyResponse.model_validate(specialty),
    )


@router.delete(
    "/{specialty_id}",
    response_model=ApiResponse[None],
    summary="Delete a Specialty",
)
async def delete_specialty(
    specialty_id: UUID,
    user: CurrentUser = Depends(admin_only),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[None]:
    try:
        await service.delete_specialty(db, specialty_id, requester=user)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error deleting specialty {specialty_id}: {e}")
        raise internal_error(e, settings.is_production) from e

    return ApiResponse(message="Specialty deleted successfully")
