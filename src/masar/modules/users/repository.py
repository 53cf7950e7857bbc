"""
Admin Repository

Database operations for admin accounts.
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from masar.modules.users.models import Admin

logger = logging.getLogger(__name__)


class AdminRepository:
    """Repository for admin database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        email: str,
        password_hash: str,
        full_name: str | None = None,
    ) -> Admin:
        """Create and commit a new admin account."""
        admin = Admin(email=email.lower(), password_hash=password_hash, full_name=full_name)

        db.add(admin)
        await db.commit()
        await db.refresh(admin)

        logger.info(f"Created admin: {admin.id} - {admin.email}")
        return admin

    @staticmethod
    async def get_by_id(db: AsyncSession, admin_id: str | UUID) -> Admin | None:
        return await db.get(Admin, admin_id if isinstance(admin_id, UUID) else UUID(admin_id))

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Admin | None:
        result = await db.execute(select(Admin).where(Admin.email == email.lower()))
        return result.scalar_one_or_none()
