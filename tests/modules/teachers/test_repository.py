"""
Unit tests for identity directory lookups.
"""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql

from masar.modules.schools.repository import SchoolRepository
from masar.modules.teachers.models import Gender, Specialty
from masar.modules.teachers.repository import SpecialtyRepository, TeacherRepository


def compiled_sql(mock_db) -> str:
    statement = mock_db.execute.call_args.args[0]
    return str(statement.compile(dialect=postgresql.dialect()))


@pytest.fixture
def empty_result(mock_db):
    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    mock_db.execute.return_value = result
    return result


class TestTeacherLookups:
    @pytest.mark.asyncio
    async def test_by_phone(self, mock_db, empty_result):
        assert await TeacherRepository.get_by_phone(mock_db, "+201001234567") is None
        assert "WHERE teachers.phone_number =" in compiled_sql(mock_db)

    @pytest.mark.asyncio
    async def test_by_national_id(self, mock_db, empty_result):
        assert await TeacherRepository.get_by_national_id(mock_db, "29001011234567") is None
        assert "WHERE teachers.national_id =" in compiled_sql(mock_db)


class TestSchoolLookups:
    @pytest.mark.asyncio
    async def test_by_whatsapp_phone(self, mock_db, empty_result):
        assert await SchoolRepository.get_by_whatsapp_phone(mock_db, "+96891234567") is None
        assert "WHERE schools.whatsapp_phone =" in compiled_sql(mock_db)


class TestSpecialtyLookups:
    @pytest.mark.asyncio
    async def test_by_id_uses_identity_map(self, mock_db):
        specialty_id = uuid4()
        mock_db.get.return_value = None

        assert await SpecialtyRepository.get_by_id(mock_db, specialty_id) is None
        mock_db.get.assert_awaited_once_with(Specialty, specialty_id)

    @pytest.mark.asyncio
    async def test_by_name_ignores_case(self, mock_db):
        result = MagicMock()
        result.scalars.return_value.first.return_value = None
        mock_db.execute.return_value = result

        assert await SpecialtyRepository.get_by_name(mock_db, " Math ", exclude_id=uuid4()) is None

        sql = compiled_sql(mock_db)
        assert "lower(specialties.name) =" in sql
        assert "specialties.id !=" in sql
        params = mock_db.execute.call_args.args[0].compile().params
        assert "math" in params.values()

    @pytest.mark.asyncio
    async def test_list_orders_by_arabic_name(self, mock_db):
        mock_db.execute.return_value = MagicMock()

        await SpecialtyRepository.list_specialties(mock_db, active=True)

        sql = compiled_sql(mock_db)
        assert "specialties.is_active IS true" in sql
        assert "ORDER BY specialties.name_ar ASC NULLS LAST, specialties.name" in sql


class TestTeacherDirectory:
    @pytest.mark.asyncio
    async def test_filters_and_order(self, mock_db):
        count = MagicMock()
        count.scalar_one.return_value = 0
        page = MagicMock()
        page.scalars.return_value.all.return_value = []
        mock_db.execute.side_effect = [count, page]

        teachers, total = await TeacherRepository.list_teachers(
            mock_db,
            specialty_id=uuid4(),
            stage="primary",
            gender=Gender.FEMALE,
            worked_in_oman_before=True,
            offset=20,
            limit=10,
        )

        assert (teachers, total) == ([], 0)
        count_sql, page_sql = (
            str(c.args[0].compile(dialect=postgresql.dialect()))
            for c in mock_db.execute.call_args_list
        )
        assert count_sql.startswith("SELECT count(teachers.id)")
        for sql in (count_sql, page_sql):
            assert "EXISTS (SELECT 1" in sql
            assert "teachers.taught_stages @>" in sql
            assert "teachers.gender =" in sql
            assert "teachers.worked_in_oman_before IS true" in sql
        assert "ORDER BY teachers.created_at DESC, teachers.id" in page_sql
        assert "LIMIT" in page_sql and "OFFSET" in page_sql


class TestSchoolDirectory:
    @pytest.mark.asyncio
    async def test_newest_first(self, mock_db):
        count = MagicMock()
        count.scalar_one.return_value = 3
        page = MagicMock()
        page.scalars.return_value.all.return_value = []
        mock_db.execute.side_effect = [count, page]

        _, total = await SchoolRepository.list_schools(mock_db, offset=0, limit=10)

        assert total == 3
        assert "ORDER BY schools.created_at DESC" in compiled_sql(mock_db)
