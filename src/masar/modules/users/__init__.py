"""
Users module - Roles and admin accounts.
"""

from masar.modules.users.models import Admin, UserRole
from masar.modules.users.repository import AdminRepository

__all__ = ["Admin", "UserRole", "AdminRepository"]
