"""
Unit tests for the acceptance service layer.

These tests cover:
- Creating acceptances (role gate, lookups, duplicate conflict)
- The accept / delete / accept cycle
- Status transitions and their validation
- School and admin listings, including pagination math
"""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from masar.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    MissingFieldError,
    NotFoundError,
)
from masar.modules.acceptances.models import AcceptanceStatus
from masar.modules.acceptances.service import (
    AlreadyAcceptedError,
    accept_teacher,
    admin_list_acceptances,
    delete_acceptance,
    list_school_acceptances,
    parse_status,
    update_acceptance_status,
)
from masar.modules.shared.pagination import total_pages

from .conftest import make_acceptance

SERVICE = "masar.modules.acceptances.service"


@pytest.fixture
def directory(sample_school, sample_teacher):
    with (
        patch(f"{SERVICE}.SchoolRepository") as schools,
        patch(f"{SERVICE}.TeacherRepository") as teachers,
    ):
        schools.get_by_id = AsyncMock(
            side_effect=lambda db, sid: sample_school if sid == sample_school.id else None
        )
        teachers.get_by_id = AsyncMock(
            side_effect=lambda db, tid: sample_teacher if tid == sample_teacher.id else None
        )
        yield schools, teachers


class TestParseStatus:
    @pytest.mark.parametrize("value", ["pending", "approved", "rejected"])
    def test_valid(self, value):
        assert parse_status(value) == AcceptanceStatus(value)

    @pytest.mark.parametrize("value", [None, "", "APPROVED", "accepted", "done"])
    def test_invalid(self, value):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_status(value)
        assert exc_info.value.message == "Valid status is required (pending, approved, rejected)"


class TestTotalPages:
    @pytest.mark.parametrize(
        ("total", "limit", "expected"),
        [(0, 20, 0), (1, 20, 1), (20, 20, 1), (21, 20, 2), (45, 10, 5), (100, 100, 1)],
    )
    def test_ceiling(self, total, limit, expected):
        assert total_pages(total, limit) == expected


class TestAcceptTeacher:
    @pytest.mark.asyncio
    async def test_creates_pending_with_empty_notes(
        self, mock_db, directory, acceptance_store, sample_teacher, school_user
    ):
        with patch(f"{SERVICE}.repository", acceptance_store):
            acceptance = await accept_teacher(
                mock_db, teacher_id=sample_teacher.id, requester=school_user
            )

        assert acceptance.status == AcceptanceStatus.PENDING
        assert acceptance.notes == ""
        assert acceptance.school_id == school_user.id
        assert acceptance.teacher_id == sample_teacher.id

    @pytest.mark.asyncio
    async def test_keeps_supplied_notes(
        self, mock_db, directory, acceptance_store, sample_teacher, school_user
    ):
        with patch(f"{SERVICE}.repository", acceptance_store):
            acceptance = await accept_teacher(
                mock_db, teacher_id=sample_teacher.id, notes="Strong demo", requester=school_user
            )
        assert acceptance.notes == "Strong demo"

    @pytest.mark.asyncio
    async def test_duplicate_is_conflict_carrying_existing_record(
        self, mock_db, directory, acceptance_store, sample_teacher, school_user
    ):
        with patch(f"{SERVICE}.repository", acceptance_store):
            first = await accept_teacher(mock_db, teacher_id=sample_teacher.id, requester=school_user)

            with pytest.raises(AlreadyAcceptedError) as exc_info:
                await accept_teacher(
                    mock_db, teacher_id=sample_teacher.id, notes="again", requester=school_user
                )

        error = exc_info.value
        assert error.status_code == 400
        assert error.message == "You have already accepted this teacher"
        assert error.data.id == first.id
        assert error.data.notes == ""
        assert len(acceptance_store.records) == 1

    @pytest.mark.asyncio
    async def test_conflicting_row_deleted_before_lookup_retries_insert(
        self, mock_db, directory, sample_teacher, school_user
    ):
        created = make_acceptance(school_user.id, sample_teacher.id)
        repo = AsyncMock()
        repo.create_if_absent = AsyncMock(side_effect=[None, created.id])
        repo.get_by_pair = AsyncMock(return_value=None)
        repo.get_by_id = AsyncMock(return_value=created)

        with patch(f"{SERVICE}.repository", repo):
            acceptance = await accept_teacher(
                mock_db, teacher_id=sample_teacher.id, requester=school_user
            )

        assert acceptance is created
        assert repo.create_if_absent.await_count == 2

    @pytest.mark.asyncio
    async def test_conflict_without_readable_row_has_no_data(
        self, mock_db, directory, sample_teacher, school_user
    ):
        repo = AsyncMock()
        repo.create_if_absent = AsyncMock(return_value=None)
        repo.get_by_pair = AsyncMock(return_value=None)

        with patch(f"{SERVICE}.repository", repo), pytest.raises(ConflictError) as exc_info:
            await accept_teacher(mock_db, teacher_id=sample_teacher.id, requester=school_user)

        assert exc_info.value.status_code == 400
        assert exc_info.value.data is None
        assert not isinstance(exc_info.value, AlreadyAcceptedError)

    @pytest.mark.asyncio
    async def test_accept_delete_accept_cycle(
        self, mock_db, directory, acceptance_store, sample_teacher, school_user, admin_user
    ):
        with patch(f"{SERVICE}.repository", acceptance_store):
            first = await accept_teacher(mock_db, teacher_id=sample_teacher.id, requester=school_user)
            await delete_acceptance(mock_db, acceptance_id=first.id, requester=admin_user)
            second = await accept_teacher(
                mock_db, teacher_id=sample_teacher.id, requester=school_user
            )

        assert second.id != first.id
        assert second.status == AcceptanceStatus.PENDING
        assert list(acceptance_store.records) == [second.id]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("requester_fixture", ["admin_user", "teacher_user"])
    async def test_only_schools_may_accept(self, mock_db, sample_teacher, requester_fixture, request):
        requester = request.getfixturevalue(requester_fixture)

        with pytest.raises(ForbiddenError) as exc_info:
            await accept_teacher(mock_db, teacher_id=sample_teacher.id, requester=requester)

        assert exc_info.value.message == "Only schools can accept teachers"

    @pytest.mark.asyncio
    async def test_missing_teacher_id(self, mock_db, school_user):
        with pytest.raises(MissingFieldError) as exc_info:
            await accept_teacher(mock_db, teacher_id=None, requester=school_user)
        assert exc_info.value.message == "Teacher ID is required"

    @pytest.mark.asyncio
    async def test_teacher_not_found(self, mock_db, directory, school_user):
        with pytest.raises(NotFoundError) as exc_info:
            await accept_teacher(mock_db, teacher_id=uuid4(), requester=school_user)
        assert exc_info.value.message == "Teacher not found"

    @pytest.mark.asyncio
    async def test_school_not_found(self, mock_db, directory, sample_teacher, other_school_user):
        with pytest.raises(NotFoundError) as exc_info:
            await accept_teacher(mock_db, teacher_id=sample_teacher.id, requester=other_school_user)
        assert exc_info.value.message == "School not found"


class TestUpdateAcceptanceStatus:
    @pytest.mark.asyncio
    async def test_approve_then_invalid_leaves_approved(
        self, mock_db, acceptance_store, sample_school, sample_teacher, admin_user
    ):
        record = make_acceptance(sample_school.id, sample_teacher.id, notes="initial")
        acceptance_store.records[record.id] = record

        with patch(f"{SERVICE}.repository", acceptance_store):
            updated = await update_acceptance_status(
                mock_db, acceptance_id=record.id, status="approved", requester=admin_user
            )
            assert updated.status == AcceptanceStatus.APPROVED

            with pytest.raises(InvalidInputError):
                await update_acceptance_status(
                    mock_db,
                    acceptance_id=record.id,
                    status="done",
                    notes="should not apply",
                    requester=admin_user,
                )

        assert record.status == AcceptanceStatus.APPROVED
        assert record.notes == "initial"

    @pytest.mark.asyncio
    async def test_invalid_status_never_loads_record(self, mock_db, admin_user):
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.get_by_id = AsyncMock()
            mock_repo.update_status = AsyncMock()

            with pytest.raises(InvalidInputError):
                await update_acceptance_status(
                    mock_db, acceptance_id=uuid4(), status="archived", requester=admin_user
                )

        mock_repo.get_by_id.assert_not_called()
        mock_repo.update_status.assert_not_called()

    @pytest.mark.asyncio
    async def test_notes_replaced_when_supplied_and_kept_when_omitted(
        self, mock_db, acceptance_store, sample_school, sample_teacher, admin_user
    ):
        record = make_acceptance(sample_school.id, sample_teacher.id, notes="first")
        acceptance_store.records[record.id] = record

        with patch(f"{SERVICE}.repository", acceptance_store):
            await update_acceptance_status(
                mock_db, acceptance_id=record.id, status="rejected", requester=admin_user
            )
            assert record.notes == "first"

            await update_acceptance_status(
                mock_db,
                acceptance_id=record.id,
                status="pending",
                notes="second",
                requester=admin_user,
            )

        assert record.status == AcceptanceStatus.PENDING
        assert record.notes == "second"

    @pytest.mark.asyncio
    async def test_any_state_reaches_any_other(
        self, mock_db, acceptance_store, sample_school, sample_teacher, admin_user
    ):
        record = make_acceptance(sample_school.id, sample_teacher.id)
        acceptance_store.records[record.id] = record

        with patch(f"{SERVICE}.repository", acceptance_store):
            for status in ["approved", "rejected", "pending", "rejected", "approved", "pending"]:
                updated = await update_acceptance_status(
                    mock_db, acceptance_id=record.id, status=status, requester=admin_user
                )
                assert updated.status == AcceptanceStatus(status)

    @pytest.mark.asyncio
    async def test_not_found(self, mock_db, acceptance_store, admin_user):
        with patch(f"{SERVICE}.repository", acceptance_store):
            with pytest.raises(NotFoundError) as exc_info:
                await update_acceptance_status(
                    mock_db, acceptance_id=uuid4(), status="approved", requester=admin_user
                )
        assert exc_info.value.message == "Acceptance not found"

    @pytest.mark.asyncio
    async def test_school_cannot_update(self, mock_db, school_user):
        with pytest.raises(ForbiddenError) as exc_info:
            await update_acceptance_status(
                mock_db, acceptance_id=uuid4(), status="approved", requester=school_user
            )
        assert exc_info.value.message == "Only admins can update acceptance status"


class TestDeleteAcceptance:
    @pytest.mark.asyncio
    async def test_not_found(self, mock_db, acceptance_store, admin_user):
        with patch(f"{SERVICE}.repository", acceptance_store):
            with pytest.raises(NotFoundError):
                await delete_acceptance(mock_db, acceptance_id=uuid4(), requester=admin_user)

    @pytest.mark.asyncio
    async def test_school_cannot_delete(self, mock_db, school_user):
        with pytest.raises(ForbiddenError):
            await delete_acceptance(mock_db, acceptance_id=uuid4(), requester=school_user)


class TestListSchoolAcceptances:
    @pytest.mark.asyncio
    async def test_lists_own_with_count(self, mock_db, sample_school, sample_teacher, school_user):
        records = [make_acceptance(sample_school.id, sample_teacher.id) for _ in range(2)]

        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.list_for_school = AsyncMock(return_value=records)
            result = await list_school_acceptances(
                mock_db, requester=school_user, status=AcceptanceStatus.PENDING
            )

        mock_repo.list_for_school.assert_awaited_once_with(
            mock_db, school_user.id, AcceptanceStatus.PENDING
        )
        assert result.count == 2
        assert [a.id for a in result.acceptances] == [r.id for r in records]

    @pytest.mark.asyncio
    async def test_admin_is_not_a_school(self, mock_db, admin_user):
        with pytest.raises(ForbiddenError) as exc_info:
            await list_school_acceptances(mock_db, requester=admin_user)
        assert exc_info.value.message == "Only schools can access this endpoint"


class TestAdminListAcceptances:
    @pytest.mark.asyncio
    async def test_pagination_metadata(self, mock_db, sample_school, sample_teacher, admin_user):
        page_items = [make_acceptance(sample_school.id, sample_teacher.id) for _ in range(5)]

        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.list_for_admin = AsyncMock(return_value=(page_items, 45))
            result = await admin_list_acceptances(mock_db, requester=admin_user, page=3, limit=20)

        kwargs = mock_repo.list_for_admin.call_args.kwargs
        assert kwargs["offset"] == 40
        assert kwargs["limit"] == 20
        assert result.pagination.model_dump(by_alias=True) == {
            "currentPage": 3,
            "totalPages": 3,
            "totalItems": 45,
            "itemsPerPage": 20,
        }
        assert len(result.acceptances) == 5

    @pytest.mark.asyncio
    async def test_page_beyond_range_is_empty(self, mock_db, admin_user):
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.list_for_admin = AsyncMock(return_value=([], 45))
            result = await admin_list_acceptances(mock_db, requester=admin_user, page=10, limit=20)

        assert result.acceptances == []
        assert result.pagination.total_pages == 3
        assert result.pagination.total_items == 45
        assert result.pagination.current_page == 10

    @pytest.mark.asyncio
    async def test_filters_are_passed_through(self, mock_db, admin_user):
        school_id, teacher_id = uuid4(), uuid4()

        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.list_for_admin = AsyncMock(return_value=([], 0))
            result = await admin_list_acceptances(
                mock_db,
                requester=admin_user,
                status=AcceptanceStatus.APPROVED,
                school_id=school_id,
                teacher_id=teacher_id,
            )

        kwargs = mock_repo.list_for_admin.call_args.kwargs
        assert kwargs["status"] == AcceptanceStatus.APPROVED
        assert kwargs["school_id"] == school_id
        assert kwargs["teacher_id"] == teacher_id
        assert kwargs["offset"] == 0
        assert kwargs["limit"] == 20
        assert result.pagination.total_pages == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("page", "limit"), [(0, 20), (1, 0), (1, 101)])
    async def test_out_of_range_arguments(self, mock_db, admin_user, page, limit):
        with pytest.raises(InvalidInputError):
            await admin_list_acceptances(mock_db, requester=admin_user, page=page, limit=limit)

    @pytest.mark.asyncio
    async def test_school_forbidden(self, mock_db, school_user):
        with pytest.raises(ForbiddenError) as exc_info:
            await admin_list_acceptances(mock_db, requester=school_user)
        assert exc_info.value.message == "Only admins can access this endpoint"
