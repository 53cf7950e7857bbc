"""
Specialty Service

Reads are public. Creating, renaming and deleting specialties is reserved to
the admin; the router enforces the role. Names are unique without regard to
case.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from masar.core.auth import CurrentUser
from masar.core.exceptions import ConflictError, NotFoundError
from masar.modules.specialties.schemas import SpecialtyCreateRequest, SpecialtyUpdateRequest
from masar.modules.teachers.models import Specialty
from masar.modules.teachers.repository import SpecialtyRepository

logger = logging.getLogger(__name__)


async def list_specialties(db: AsyncSession, *, active: bool | None = None) -> list[Specialty]:
    return await SpecialtyRepository.list_specialties(db, active=active)


async def get_specialty(db: AsyncSession, specialty_id: UUID) -> Specialty:
    specialty = await SpecialtyRepository.get_by_id(db, specialty_id)
    if specialty is None:
        raise NotFoundError("Specialty")
    return specialty


async def create_specialty(
    db: AsyncSession, data: SpecialtyCreateRequest, *, requester: CurrentUser
) -> Specialty:
    """
    Raises:
        ConflictError: If a specialty with the same name exists
    """
    if await SpecialtyRepository.get_by_name(db, data.name):
        raise ConflictError("Specialty already exists")

    try:
        specialty = await SpecialtyRepository.create(
            db,
            name=data.name,
            name_ar=data.name_ar,
            description=data.description,
            is_active=data.is_active,
        )
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError("Specialty already exists") from e

    logger.info(f"Specialty {specialty.id} ({specialty.name}) created by {requester}")
    return specialty


async def update_specialty(
    db: AsyncSession,
    specialty_id: UUID,
    data: SpecialtyUpdateRequest,
    *,
    requester: CurrentUser,
) -> Specialty:
    """
    Raises:
        NotFoundError: If the specialty does not exist
        ConflictError: If the new name belongs to another specialty
    """
    specialty = await get_specialty(db, specialty_id)

    if data.name and await SpecialtyRepository.get_by_name(db, data.name, exclude_id=specialty_id):
        raise ConflictError("Specialty name already exists")

    try:
        specialty = await SpecialtyRepository.update(
            db,
            specialty,
            name=data.name.strip() if data.name else None,
            name_ar=data.name_ar,
            description=data.description,
            is_active=data.is_active,
        )
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError("Specialty name already exists") from e

    logger.info(f"Specialty {specialty_id} updated by {requester}")
    return specialty


async def delete_specialty(
    db: AsyncSession, specialty_id: UUID, *, requester: CurrentUser
) -> None:
    """
    Delete a specialty together with teacher registrations and videos for it.

    Raises:
        NotFoundError: If the specialty does not exist
    """
    if not await SpecialtyRepository.delete(db, specialty_id):
        raise NotFoundError("Specialty")

    logger.info(f"Specialty {specialty_id} deleted by {requester}")
