"""
Schools module - School accounts.
"""

from masar.modules.schools.models import School
from masar.modules.schools.repository import SchoolRepository

__all__ = ["School", "SchoolRepository"]
