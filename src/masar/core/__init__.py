"""
Core module - Configuration, database, security, errors, and notifications.
"""

from masar.core.config import Settings, get_settings
from masar.core.database import Base, close_db, get_db, get_session_maker, init_db
from masar.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    MissingFieldError,
    NotFoundError,
    ServiceError,
)
from masar.core.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Database
    "Base",
    "get_db",
    "get_session_maker",
    "init_db",
    "close_db",
    # Errors
    "ServiceError",
    "ForbiddenError",
    "NotFoundError",
    "MissingFieldError",
    "InvalidInputError",
    "ConflictError",
    # Security
    "hash_password",
    "verify_password",
    "create_access_token",
    "create_refresh_token",
    "decode_token",
]
