"""
Teachers module - Teacher accounts and specialties.
"""

from masar.modules.teachers.models import Gender, Specialty, Teacher
from masar.modules.teachers.repository import SpecialtyRepository, TeacherRepository

__all__ = ["Gender", "Specialty", "Teacher", "SpecialtyRepository", "TeacherRepository"]
