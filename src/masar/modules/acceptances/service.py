"""
Acceptance Service Layer

Business logic for the moderated acceptance workflow.

This module implements:
1. Create: a school accepts a teacher; the record starts as pending.
   At most one acceptance exists per (school, teacher); a repeat is a
   conflict that carries the existing record.
2. Query: a school lists its own acceptances; an admin lists all of them
   with filters and pagination.
3. Transition: an admin moves an acceptance between pending, approved and
   rejected, optionally replacing its notes.
4. Delete: an admin removes an acceptance, freeing the pair.

No notifications are sent from this flow.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from masar.core.auth import CurrentUser
from masar.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    MissingFieldError,
    NotFoundError,
)
from masar.modules.acceptances import repository
from masar.modules.acceptances.models import Acceptance, AcceptanceStatus
from masar.modules.acceptances.schemas import (
    AcceptanceResponse,
    AdminAcceptancesResponse,
    SchoolAcceptancesResponse,
)
from masar.modules.schools.repository import SchoolRepository
from masar.modules.shared.pagination import DEFAULT_PAGE, Pagination, check_page_bounds
from masar.modules.teachers.repository import TeacherRepository

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20


class AlreadyAcceptedError(ConflictError):
    """Raised when the school has already accepted the teacher."""

    def __init__(self, existing: AcceptanceResponse):
        super().__init__("You have already accepted this teacher", data=existing)


def _require_admin(requester: CurrentUser, message: str) -> None:
    if not requester.is_admin:
        logger.warning(f"{requester} denied admin acceptance operation")
        raise ForbiddenError(message)


def parse_status(value: str | None) -> AcceptanceStatus:
    """
    Parse a raw status value.

    Raises:
        InvalidInputError: If value is not one of pending, approved, rejected
    """
    try:
        return AcceptanceStatus(value)
    except ValueError as e:
        raise InvalidInputError(
            f"Valid status is required ({', '.join(AcceptanceStatus.values())})"
        ) from e


async def accept_teacher(
    db: AsyncSession,
    *,
    teacher_id: UUID | None,
    requester: CurrentUser,
    notes: str | None = None,
) -> Acceptance:
    """
    Record that the requesting school accepts a teacher.

    Args:
        db: Database session
        teacher_id: Teacher being accepted
        requester: Authenticated caller; must be a school
        notes: Optional free text, stored as "" when absent

    Returns:
        The new acceptance with school and teacher loaded

    Raises:
        ForbiddenError: If the caller is not a school
        MissingFieldError: If teacher_id is absent
        NotFoundError: If the school or teacher does not exist
        AlreadyAcceptedError: If this school already accepted this teacher
    """
    if not requester.is_school:
        raise ForbiddenError("Only schools can accept teachers")

    if teacher_id is None:
        raise MissingFieldError("Teacher ID is required")

    school_id = requester.id

    if await SchoolRepository.get_by_id(db, school_id) is None:
        raise NotFoundError("School")

    if await TeacherRepository.get_by_id(db, teacher_id) is None:
        raise NotFoundError("Teacher")

    acceptance_id = await repository.create_if_absent(db, school_id, teacher_id, notes or "")
    if acceptance_id is None:
        existing = await repository.get_by_pair(db, school_id, teacher_id)
        if existing is not None:
            logger.warning(f"School {school_id} already accepted teacher {teacher_id}")
            raise AlreadyAcceptedError(AcceptanceResponse.model_validate(existing))

        # The conflicting row was deleted before it could be read back
        logger.info(f"Acceptance for school {school_id}, teacher {teacher_id} vanished; retrying")
        acceptance_id = await repository.create_if_absent(db, school_id, teacher_id, notes or "")
        if acceptance_id is None:
            raise ConflictError("You have already accepted this teacher")

    acceptance = await repository.get_by_id(db, acceptance_id)
    logger.info(
        f"Acceptance created: id={acceptance_id}, school={school_id}, "
        f"teacher={teacher_id}, status=pending"
    )
    return acceptance


async def list_school_acceptances(
    db: AsyncSession,
    *,
    requester: CurrentUser,
    status: AcceptanceStatus | None = None,
) -> SchoolAcceptancesResponse:
    """
    List the requesting school's acceptances, newest first.

    Raises:
        ForbiddenError: If the caller is not a school
    """
    if not requester.is_school:
        raise ForbiddenError("Only schools can access this endpoint")

    acceptances = await repository.list_for_school(db, requester.id, status)
    return SchoolAcceptancesResponse(
        count=len(acceptances),
        acceptances=[AcceptanceResponse.model_validate(a) for a in acceptances],
    )


async def admin_list_acceptances(
    db: AsyncSession,
    *,
    requester: CurrentUser,
    status: AcceptanceStatus | None = None,
    school_id: UUID | None = None,
    teacher_id: UUID | None = None,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
) -> AdminAcceptancesResponse:
    """
    List all acceptances for admins, filtered and paginated, newest first.

    A page past the last one yields an empty list with the true totals.

    Raises:
        ForbiddenError: If the caller is not an admin
        InvalidInputError: If page < 1 or limit is outside 1..100
    """
    _require_admin(requester, "Only admins can access this endpoint")

    check_page_bounds(page, limit)

    acceptances, total = await repository.list_for_admin(
        db,
        status=status,
        school_id=school_id,
        teacher_id=teacher_id,
        offset=(page - 1) * limit,
        limit=limit,
    )

    return AdminAcceptancesResponse(
        acceptances=[AcceptanceResponse.model_validate(a) for a in acceptances],
        pagination=Pagination.for_page(page, limit, total),
    )


async def update_acceptance_status(
    db: AsyncSession,
    *,
    acceptance_id: UUID,
    status: str | None,
    requester: CurrentUser,
    notes: str | None = None,
) -> Acceptance:
    """
    Move an acceptance to a new status.

    The status is validated before the record is loaded, so an invalid
    value never touches the stored acceptance.

    Raises:
        ForbiddenError: If the caller is not an admin
        InvalidInputError: If status is outside the domain
        NotFoundError: If the acceptance does not exist
    """
    _require_admin(requester, "Only admins can update acceptance status")

    new_status = parse_status(status)

    acceptance = await repository.get_by_id(db, acceptance_id)
    if acceptance is None:
        raise NotFoundError("Acceptance")

    old_status = acceptance.status
    await repository.update_status(db, acceptance, new_status, notes)
    acceptance = await repository.get_by_id(db, acceptance_id)

    logger.info(
        f"Acceptance {acceptance_id} status changed: {old_status.value} -> {new_status.value} "
        f"by {requester}"
    )
    return acceptance


async def delete_acceptance(
    db: AsyncSession, *, acceptance_id: UUID, requester: CurrentUser
) -> None:
    """
    Delete an acceptance. The (school, teacher) pair can be accepted again afterwards.

    Raises:
        ForbiddenError: If the caller is not an admin
        NotFoundError: If the acceptance does not exist
    """
    _require_admin(requester, "Only admins can access this endpoint")

    acceptance = await repository.get_by_id(db, acceptance_id)
    if acceptance is None:
        raise NotFoundError("Acceptance")

    await repository.delete(db, acceptance)
    logger.info(f"Acceptance {acceptance_id} deleted by {requester}")
