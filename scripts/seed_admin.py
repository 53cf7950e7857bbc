"""
Seed Admin Account

Creates the admin account from ADMIN_EMAIL / ADMIN_PASSWORD if it does not
exist yet. Safe to run repeatedly.

Usage:
    pip install -e .
    python scripts/seed_admin.py
"""

import asyncio

import masar.models  # noqa: F401 - needed for relationship resolution
from masar.core.config import get_settings
from masar.core.database import close_db, get_session_maker, init_db
from masar.core.security import hash_password
from masar.modules.users.repository import AdminRepository


async def seed_admin() -> None:
    """Create the admin account if it doesn't exist."""
    settings = get_settings()
    await init_db(settings)

    try:
        async with get_session_maker()() as db:
            existing = await AdminRepository.get_by_email(db, settings.admin_email)

            if existing:
                print(f"Admin already exists: {existing.email}")
                print(f"  ID: {existing.id}")
                return

            admin = await AdminRepository.create(
                db,
                email=settings.admin_email,
                password_hash=hash_password(settings.admin_password),
                full_name="Masar Admin",
            )

            print("Admin created successfully!")
            print(f"  Email: {admin.email}")
            print(f"  ID: {admin.id}")
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(seed_admin())
