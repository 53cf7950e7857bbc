"""
Video Schemas
"""

from datetime import datetime
from uuid import UUID

from masar.modules.shared.schemas import CamelModel


class VideoUpsertRequest(CamelModel):
    """Request body for POST /videos. The file itself is hosted elsewhere."""

    specialty_id: UUID | None = None
    title: str | None = None
    video_url: str | None = None


class VideoResponse(CamelModel):
    id: UUID
    teacher_id: UUID
    specialty_id: UUID
    title: str
    video_url: str
    uploaded_at: datetime
