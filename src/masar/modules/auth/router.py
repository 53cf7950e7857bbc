"""
Authentication router.

Registration for teachers and schools, and one login endpoint per account
type. Every success returns a bearer access token whose claims carry the
account id, role and display name.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from masar.core.config import Settings, get_settings
from masar.core.database import get_db
from masar.core.exceptions import ServiceError, internal_error
from masar.core.security import create_access_token, create_refresh_token, verify_password
from masar.modules.auth import service
from masar.modules.auth.schemas import (
    AdminLoginRequest,
    AuthUser,
    LoginResponse,
    SchoolLoginRequest,
    SchoolRegisterRequest,
    TeacherLoginRequest,
    TeacherRegisterRequest,
)
from masar.modules.schools.repository import SchoolRepository
from masar.modules.shared.schemas import ApiResponse
from masar.modules.teachers.repository import TeacherRepository
from masar.modules.users.models import UserRole
from masar.modules.users.repository import AdminRepository

logger = logging.getLogger(__name__)

router = APIRouter()


def _invalid_credentials(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={
            "error": "INVALID_CREDENTIALS",
            "message": message,
        },
    )


def _issue_tokens(
    settings: Settings, account_id: UUID, role: UserRole, name: str
) -> LoginResponse:
    access_token = create_access_token(
        settings,
        subject=str(account_id),
        additional_claims={"role": role.value, "name": name},
    )
    refresh_token = create_refresh_token(settings, subject=str(account_id), role=role.value)

    return LoginResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        user=AuthUser(id=account_id, role=role, name=name),
    )


@router.post(
    "/register/teacher",
    response_model=ApiResponse[LoginResponse],
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Validation failed, or phone/national ID already registered"},
    },
)
async def register_teacher(
    data: TeacherRegisterRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[LoginResponse]:
    """Create a teacher account and sign it in."""
    try:
        teacher = await service.register_teacher(db, data)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error registering teacher: {e}")
        raise internal_error(e, settings.is_production) from e

    logger.info(f"Teacher registered: {teacher.id}")
    return ApiResponse(
        message="Teacher registered successfully",
        data=_issue_tokens(settings, teacher.id, UserRole.TEACHER, teacher.full_name),
    )


@router.post(
    "/register/school",
    response_model=ApiResponse[LoginResponse],
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Validation failed, or phone already registered"}},
)
async def register_school(
    data: SchoolRegisterRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[LoginResponse]:
    """Create a school account and sign it in."""
    try:
        school = await service.register_school(db, data)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error registering school: {e}")
        raise internal_error(e, settings.is_production) from e

    logger.info(f"School registered: {school.id}")
    return ApiResponse(
        message="School registered successfully",
        data=_issue_tokens(settings, school.id, UserRole.SCHOOL, school.school_name),
    )


@router.post(
    "/login/teacher",
    response_model=ApiResponse[LoginResponse],
    response_model_by_alias=True,
)
async def login_teacher(
    credentials: TeacherLoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[LoginResponse]:
    """
    Authenticate a teacher by phone number and password.

    Raises:
        HTTPException 401: Invalid credentials
    """
    try:
        teacher = await TeacherRepository.get_by_phone(db, credentials.phone_number)
        valid = teacher is not None and verify_password(
            credentials.password, teacher.password_hash
        )
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error during teacher login: {e}")
        raise internal_error(e, settings.is_production) from e

    if not valid:
        logger.warning(f"Failed teacher login for phone: {credentials.phone_number}")
        raise _invalid_credentials("Invalid phone number or password.")

    logger.info(f"Teacher logged in: {teacher.id}")
    return ApiResponse(
        message="Login successful",
        data=_issue_tokens(settings, teacher.id, UserRole.TEACHER, teacher.full_name),
    )


@router.post(
    "/login/school",
    response_model=ApiResponse[LoginResponse],
    response_model_by_alias=True,
)
async def login_school(
    credentials: SchoolLoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[LoginResponse]:
    """
    Authenticate a school by WhatsApp phone and password.

    Raises:
        HTTPException 401: Invalid credentials
    """
    try:
        school = await SchoolRepository.get_by_whatsapp_phone(db, credentials.whatsapp_phone)
        valid = school is not None and verify_password(credentials.password, school.password_hash)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error during school login: {e}")
        raise internal_error(e, settings.is_production) from e

    if not valid:
        logger.warning(f"Failed school login for phone: {credentials.whatsapp_phone}")
        raise _invalid_credentials("Invalid WhatsApp phone or password.")

    logger.info(f"School logged in: {school.id}")
    return ApiResponse(
        message="Login successful",
        data=_issue_tokens(settings, school.id, UserRole.SCHOOL, school.school_name),
    )


@router.post(
    "/login/admin",
    response_model=ApiResponse[LoginResponse],
    response_model_by_alias=True,
)
async def login_admin(
    credentials: AdminLoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[LoginResponse]:
    """
    Authenticate the admin by email and password.

    Raises:
        HTTPException 401: Invalid credentials
    """
    try:
        admin = await AdminRepository.get_by_email(db, credentials.email)
        valid = admin is not None and verify_password(credentials.password, admin.password_hash)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error during admin login: {e}")
        raise internal_error(e, settings.is_production) from e

    if not valid:
        logger.warning(f"Failed admin login for email: {credentials.email}")
        raise _invalid_credentials("Invalid email or password.")

    logger.info(f"Admin logged in: {admin.id}")
    return ApiResponse(
        message="Login successful",
        data=_issue_tokens(settings, admin.id, UserRole.ADMIN, admin.full_name or admin.email),
    )
