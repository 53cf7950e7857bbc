"""
Videos Module

Demo videos filed under a teacher's registered specialties.
"""

from masar.modules.videos.models import Video

__all__ = ["Video"]
