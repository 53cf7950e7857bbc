"""
Selection Service Layer

Business logic for the school shortlist ("selected teachers") flow.

This module implements:
1. Select: add a teacher to a school's shortlist exactly once, then notify
   the admin over WhatsApp. The shortlist write is committed before the
   notification is handed off, and a failed hand-off never fails the request.
2. List: a school's selected teachers in selection order.
3. Remove: drop a teacher from a school's shortlist (no-op if absent).
4. Reconciliation: compare shortlists with acceptance records.

Authorization: admins may act on any school; a school may act only on its
own id; teachers may not use these operations.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from masar.core.auth import CurrentUser
from masar.core.exceptions import ConflictError, ForbiddenError, MissingFieldError, NotFoundError
from masar.core.notifications import NotificationDispatcher
from masar.modules.schools.models import School
from masar.modules.schools.repository import SchoolRepository
from masar.modules.schools.schemas import SchoolRef
from masar.modules.selection import repository
from masar.modules.selection.helpers import format_teacher_selection_message
from masar.modules.selection.schemas import (
    ReconciliationReport,
    SchoolSelectionsResponse,
    SelectionPair,
    SelectTeacherResponse,
)
from masar.modules.teachers.repository import TeacherRepository
from masar.modules.teachers.schemas import TeacherRef, TeacherSummary

logger = logging.getLogger(__name__)


class AlreadySelectedError(ConflictError):
    """Raised when the teacher is already on the school's shortlist."""

    def __init__(self):
        super().__init__("Teacher is already selected by this school")


def _ensure_school_access(requester: CurrentUser, school_id: UUID, message: str) -> None:
    if requester.is_admin:
        return
    if requester.is_school and requester.id == school_id:
        return
    logger.warning(f"{requester} denied access to selections of school {school_id}")
    raise ForbiddenError(message)


async def _get_school_or_raise(db: AsyncSession, school_id: UUID) -> School:
    school = await SchoolRepository.get_by_id(db, school_id)
    if school is None:
        raise NotFoundError("School")
    return school


async def select_teacher(
    db: AsyncSession,
    notifier: NotificationDispatcher,
    *,
    school_id: UUID | None,
    teacher_id: UUID | None,
    requester: CurrentUser,
    video_id: UUID | None = None,
) -> SelectTeacherResponse:
    """
    Add a teacher to a school's shortlist and notify the admin.

    Args:
        db: Database session
        notifier: Dispatcher the admin notification is handed to
        school_id: School doing the selecting
        teacher_id: Teacher being selected
        requester: Authenticated caller
        video_id: Video the school watched, echoed back to the caller

    Returns:
        School and teacher references plus the video id

    Raises:
        MissingFieldError: If school_id or teacher_id is absent
        ForbiddenError: If the caller may not act for this school
        NotFoundError: If the school or teacher does not exist
        AlreadySelectedError: If the teacher is already selected
    """
    if school_id is None or teacher_id is None:
        raise MissingFieldError("School ID and Teacher ID are required")

    _ensure_school_access(requester, school_id, "You can only select teachers for your own school")

    school = await _get_school_or_raise(db, school_id)

    teacher = await TeacherRepository.get_by_id(db, teacher_id)
    if teacher is None:
        raise NotFoundError("Teacher")

    school_name = school.school_name
    teacher_name = teacher.full_name

    added = await repository.add_selection(db, school_id, teacher_id)
    if not added:
        logger.warning(f"School {school_id} already selected teacher {teacher_id}")
        raise AlreadySelectedError()

    logger.info(f"Teacher selected: school={school_id}, teacher={teacher_id}, by {requester}")

    message = format_teacher_selection_message(school_name, teacher_name, teacher_id)
    try:
        notifier.notify_admin(message)
    except Exception as e:
        logger.error(
            f"Failed to queue selection notification for school={school_id}, "
            f"teacher={teacher_id}: {e}",
            exc_info=True,
        )

    return SelectTeacherResponse(
        school=SchoolRef(id=school_id, name=school_name),
        teacher=TeacherRef(id=teacher_id, name=teacher_name),
        video_id=video_id,
    )


async def list_selections(
    db: AsyncSession, *, school_id: UUID, requester: CurrentUser
) -> SchoolSelectionsResponse:
    """
    List a school's selected teachers in the order they were selected.

    Raises:
        ForbiddenError: If the caller may not view this school's selections
        NotFoundError: If the school does not exist
    """
    _ensure_school_access(requester, school_id, "You can only view your own selections")

    school = await _get_school_or_raise(db, school_id)
    teachers = await repository.list_selected_teachers(db, school_id)

    return SchoolSelectionsResponse(
        school=SchoolRef(id=school.id, name=school.school_name),
        selected_teachers=[TeacherSummary.model_validate(t) for t in teachers],
    )


async def remove_selection(
    db: AsyncSession,
    *,
    school_id: UUID | None,
    teacher_id: UUID | None,
    requester: CurrentUser,
) -> None:
    """
    Remove a teacher from a school's shortlist. Removing a teacher that is
    not on the list succeeds without changes.

    Raises:
        MissingFieldError: If school_id or teacher_id is absent
        ForbiddenError: If the caller may not manage this school's selections
        NotFoundError: If the school does not exist
    """
    if school_id is None or teacher_id is None:
        raise MissingFieldError("School ID and Teacher ID are required")

    _ensure_school_access(requester, school_id, "You can only manage your own selections")

    await _get_school_or_raise(db, school_id)

    removed = await repository.remove_selection(db, school_id, teacher_id)
    if removed:
        logger.info(f"Teacher removed from selections: school={school_id}, teacher={teacher_id}")
    else:
        logger.debug(f"Teacher {teacher_id} was not selected by school {school_id}, nothing removed")


async def build_reconciliation_report(db: AsyncSession) -> ReconciliationReport:
    """
    Compare school shortlists with acceptance records. Read-only.

    Returns:
        Pairs present in only one representation, and the count present in both
    """
    shortlisted = await repository.list_selection_pairs(db)
    accepted = await repository.list_acceptance_pairs(db)

    def _pairs(pairs: set[tuple[UUID, UUID]]) -> list[SelectionPair]:
        return [
            SelectionPair(school_id=school_id, teacher_id=teacher_id)
            for school_id, teacher_id in sorted(pairs, key=lambda p: (str(p[0]), str(p[1])))
        ]

    return ReconciliationReport(
        shortlist_only=_pairs(shortlisted - accepted),
        acceptance_only=_pairs(accepted - shortlisted),
        in_both=len(shortlisted & accepted),
    )
