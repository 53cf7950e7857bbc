"""
Fixtures for selection tests.
"""

from unittest.mock import MagicMock

import pytest

from masar.core.notifications import NotificationDispatcher


class InMemorySelections:
    """Stand-in for the selection repository with set semantics per school."""

    def __init__(self, teachers_by_id: dict):
        self.teachers_by_id = teachers_by_id
        self.rows: list[tuple] = []

    async def add_selection(self, db, school_id, teacher_id) -> bool:
        if (school_id, teacher_id) in self.rows:
            return False
        self.rows.append((school_id, teacher_id))
        return True

    async def remove_selection(self, db, school_id, teacher_id) -> int:
        before = len(self.rows)
        self.rows = [row for row in self.rows if row != (school_id, teacher_id)]
        return before - len(self.rows)

    async def list_selected_teachers(self, db, school_id):
        return [self.teachers_by_id[t] for s, t in self.rows if s == school_id]


@pytest.fixture
def mock_notifier():
    notifier = MagicMock(spec=NotificationDispatcher)
    notifier.notify_admin.return_value = True
    return notifier


@pytest.fixture
def selection_store(sample_teacher):
    return InMemorySelections({sample_teacher.id: sample_teacher})
