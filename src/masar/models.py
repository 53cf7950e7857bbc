"""
Model registry.

Importing this module registers every table on Base.metadata, which
Alembic and the relationship string lookups rely on.
"""

from masar.modules.acceptances.models import Acceptance, AcceptanceStatus
from masar.modules.schools.models import School
from masar.modules.selection.models import SchoolSelection
from masar.modules.teachers.models import Specialty, Teacher, teacher_specialties
from masar.modules.users.models import Admin
from masar.modules.videos.models import Video

__all__ = [
    "Acceptance",
    "AcceptanceStatus",
    "Admin",
    "School",
    "SchoolSelection",
    "Specialty",
    "Teacher",
    "Video",
    "teacher_specialties",
]
