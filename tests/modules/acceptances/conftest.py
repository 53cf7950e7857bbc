"""
Fixtures for acceptance tests.
"""

from datetime import UTC, datetime
from types import SimpleNamespace
from uuid import uuid4

import pytest

from masar.modules.acceptances.models import AcceptanceStatus


def make_acceptance(school_id, teacher_id, status=AcceptanceStatus.PENDING, notes=""):
    return SimpleNamespace(
        id=uuid4(),
        school_id=school_id,
        teacher_id=teacher_id,
        status=status,
        notes=notes,
        accepted_at=datetime.now(UTC),
        school=None,
        teacher=None,
    )


class InMemoryAcceptances:
    """Stand-in for the acceptance repository keeping one record per pair."""

    def __init__(self):
        self.records: dict = {}

    async def create_if_absent(self, db, school_id, teacher_id, notes=""):
        if any(
            (r.school_id, r.teacher_id) == (school_id, teacher_id) for r in self.records.values()
        ):
            return None
        record = make_acceptance(school_id, teacher_id, notes=notes)
        self.records[record.id] = record
        return record.id

    async def get_by_id(self, db, acceptance_id):
        return self.records.get(acceptance_id)

    async def get_by_pair(self, db, school_id, teacher_id):
        for record in self.records.values():
            if (record.school_id, record.teacher_id) == (school_id, teacher_id):
                return record
        return None

    async def update_status(self, db, acceptance, status, notes=None):
        acceptance.status = status
        if notes is not None:
            acceptance.notes = notes
        return acceptance

    async def delete(self, db, acceptance):
        del self.records[acceptance.id]


@pytest.fixture
def acceptance_store():
    return InMemoryAcceptances()
