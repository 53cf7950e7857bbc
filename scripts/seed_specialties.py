"""
Seed Specialties

Inserts the default teaching specialties. Names that already exist
(compared case-insensitively) are skipped, so the script is safe to run
repeatedly.

Usage:
    pip install -e .
    python scripts/seed_specialties.py
"""

import asyncio

import masar.models  # noqa: F401 - needed for relationship resolution
from masar.core.config import get_settings
from masar.core.database import close_db, get_session_maker, init_db
from masar.modules.teachers.repository import SpecialtyRepository

# (name, name_ar, description)
DEFAULT_SPECIALTIES = [
    ("Mathematics", "الرياضيات", "Teaching mathematics at all levels"),
    ("Physics", "الفيزياء", "Teaching physics and physical sciences"),
    ("Chemistry", "الكيمياء", "Teaching chemistry and chemical sciences"),
    ("Biology", "الأحياء", "Teaching biology and life sciences"),
    ("English Language", "اللغة الإنجليزية", "Teaching English language and literature"),
    ("Arabic Language", "اللغة العربية", "Teaching Arabic language and literature"),
    ("Islamic Studies", "التربية الإسلامية", "Teaching Islamic studies and Quran"),
    ("History", "التاريخ", "Teaching history and social studies"),
    ("Geography", "الجغرافيا", "Teaching geography and earth sciences"),
    ("Computer Science", "علوم الحاسوب", "Teaching computer science and programming"),
    ("Art", "الفنون", "Teaching art and design"),
    ("Music", "الموسيقى", "Teaching music and music theory"),
    ("Physical Education", "التربية الرياضية", "Teaching physical education and sports"),
    ("French Language", "اللغة الفرنسية", "Teaching French language"),
    ("German Language", "اللغة الألمانية", "Teaching German language"),
]


async def seed_specialties() -> None:
    """Create every default specialty that doesn't exist yet."""
    settings = get_settings()
    await init_db(settings)

    created = 0
    skipped = 0
    try:
        async with get_session_maker()() as db:
            for name, name_ar, description in DEFAULT_SPECIALTIES:
                if await SpecialtyRepository.get_by_name(db, name):
                    print(f"Skipped (exists): {name}")
                    skipped += 1
                    continue

                await SpecialtyRepository.create(
                    db,
                    name=name,
                    name_ar=name_ar,
                    description=description,
                    is_active=True,
                )
                print(f"Created: {name} ({name_ar})")
                created += 1
    finally:
        await close_db()

    print()
    print("Specialty seeding complete")
    print(f"  Created: {created}")
    print(f"  Skipped: {skipped}")
    print(f"  Total:   {len(DEFAULT_SPECIALTIES)}")


if __name__ == "__main__":
    asyncio.run(seed_specialties())
