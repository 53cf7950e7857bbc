"""
Registration Service

Creates teacher and school accounts. Login stays in the router since it is
a lookup plus a password check.

Uniqueness is checked up front so each clash gets its own message; the
database unique constraints still decide when two registrations race.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from masar.core.exceptions import ConflictError, InvalidInputError
from masar.core.security import hash_password
from masar.modules.auth.schemas import SchoolRegisterRequest, TeacherRegisterRequest
from masar.modules.schools.models import School
from masar.modules.schools.repository import SchoolRepository
from masar.modules.teachers.models import Teacher
from masar.modules.teachers.repository import SpecialtyRepository, TeacherRepository

logger = logging.getLogger(__name__)


async def register_teacher(db: AsyncSession, data: TeacherRegisterRequest) -> Teacher:
    """
    Create a teacher account registered for the requested specialties.

    Raises:
        ConflictError: If the phone number or national ID is already registered
        InvalidInputError: If a specialty does not exist or is inactive
    """
    if await TeacherRepository.get_by_phone(db, data.phone_number):
        logger.warning(f"Teacher registration rejected, phone taken: {data.phone_number}")
        raise ConflictError("Phone number already registered")

    if await TeacherRepository.get_by_national_id(db, data.national_id):
        logger.warning("Teacher registration rejected, national ID taken")
        raise ConflictError("National ID already registered")

    specialty_ids = list(dict.fromkeys(data.specialties))
    specialties = await SpecialtyRepository.get_many(db, specialty_ids)
    if len(specialties) != len(specialty_ids):
        raise InvalidInputError("One or more specialties do not exist")
    if not all(s.is_active for s in specialties):
        raise InvalidInputError("One or more specialties are not open for registration")

    try:
        teacher = await TeacherRepository.create(
            db,
            specialties=specialties,
            full_name=data.full_name.strip(),
            phone_number=data.phone_number,
            national_id=data.national_id,
            password_hash=hash_password(data.password),
            gender=data.gender,
            age=data.age,
            address=data.address,
            academic_qualification=data.academic_qualification,
            diploma=data.diploma,
            courses=data.courses,
            taught_stages=[stage.value for stage in data.taught_stages],
            worked_in_oman_before=data.worked_in_oman_before,
        )
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Teacher registration lost a uniqueness race: {data.phone_number}")
        raise ConflictError("Phone number or national ID already registered") from e

    return teacher


async def register_school(db: AsyncSession, data: SchoolRegisterRequest) -> School:
    """
    Create a school account.

    Raises:
        ConflictError: If the WhatsApp phone is already registered
    """
    if await SchoolRepository.get_by_whatsapp_phone(db, data.whatsapp_phone):
        logger.warning(f"School registration rejected, phone taken: {data.whatsapp_phone}")
        raise ConflictError("Phone number already registered")

    try:
        school = await SchoolRepository.create(
            db,
            manager_name=data.manager_name.strip(),
            whatsapp_phone=data.whatsapp_phone,
            password_hash=hash_password(data.password),
            school_name=data.school_name.strip(),
            school_location=data.school_location,
            stages_needed=[stage.value for stage in data.stages_needed],
            specialties_needed=data.specialties_needed,
            expected_salary_range=data.expected_salary_range,
            flight_ticket_provided=data.flight_ticket_provided,
            housing_provided=data.housing_provided,
            housing_allowance=data.housing_allowance,
        )
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"School registration lost a uniqueness race: {data.whatsapp_phone}")
        raise ConflictError("Phone number already registered") from e

    return school
