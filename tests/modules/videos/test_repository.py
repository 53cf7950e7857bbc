"""
Unit tests for the video repository.
"""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql

from masar.modules.videos import repository


class TestUpsert:
    @pytest.mark.asyncio
    async def test_insert_on_conflict_do_update(self, mock_db):
        video_id = uuid4()
        result = MagicMock()
        result.scalar_one.return_value = video_id
        mock_db.execute.return_value = result

        stored = await repository.upsert(
            mock_db,
            teacher_id=uuid4(),
            specialty_id=uuid4(),
            title="Algebra",
            video_url="https://cdn/a.mp4",
        )

        assert stored == video_id
        sql = str(mock_db.execute.call_args.args[0].compile(dialect=postgresql.dialect()))
        assert "ON CONFLICT ON CONSTRAINT uq_videos_teacher_specialty DO UPDATE" in sql
        assert "title = excluded.title" in sql
        assert "video_url = excluded.video_url" in sql
        mock_db.commit.assert_awaited_once()
