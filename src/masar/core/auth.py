"""
Authentication and Authorization Module

FastAPI dependencies that resolve the requester identity from a JWT bearer
token and gate endpoints by role. Ownership rules (a school acting only on
its own id) are enforced in the service layer, which receives the
CurrentUser explicitly.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from masar.core.config import Settings, get_settings
from masar.core.exceptions import ForbiddenError, UnauthorizedError
from masar.core.security import decode_token
from masar.modules.users.models import UserRole

logger = logging.getLogger(__name__)

# auto_error is off so a missing header renders through our own 401 envelope
security = HTTPBearer(
    auto_error=False,
    description="JWT Bearer token for authentication",
)


@dataclass(frozen=True)
class CurrentUser:
    """
    The authenticated requester, populated from JWT claims.

    Attributes:
        id: Identifier of the teacher, school or admin record
        role: Role claim of the token
        name: Display name (optional)
    """

    id: UUID
    role: UserRole
    name: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_school(self) -> bool:
        return self.role == UserRole.SCHOOL

    @property
    def is_teacher(self) -> bool:
        return self.role == UserRole.TEACHER

    def __str__(self) -> str:
        return f"CurrentUser(id={self.id}, role={self.role.value})"


def user_from_claims(payload: dict) -> CurrentUser:
    """
    Build a CurrentUser from decoded token claims.

    Raises:
        UnauthorizedError: If required claims are missing or malformed
    """
    if payload.get("type", "access") != "access":
        logger.warning(f"Invalid token type: {payload.get('type')}")
        raise UnauthorizedError("This endpoint requires an access token.")

    try:
        return CurrentUser(
            id=UUID(payload["sub"]),
            role=UserRole(payload["role"]),
            name=payload.get("name"),
        )
    except (KeyError, ValueError, TypeError) as e:
        logger.warning(f"Invalid token claims: {e}")
        raise UnauthorizedError("Token contains invalid or missing claims.") from e


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> CurrentUser:
    """
    FastAPI dependency that validates the bearer token and returns the requester.

    Raises:
        UnauthorizedError: If the token is missing, invalid or expired
    """
    if credentials is None:
        raise UnauthorizedError("No token provided. Authorization denied.")

    payload = decode_token(settings, credentials.credentials)
    if payload is None:
        logger.warning("Invalid or expired JWT token")
        raise UnauthorizedError("Invalid or expired authentication token.")

    user = user_from_claims(payload)
    logger.debug(f"Authenticated {user}")
    return user


def require_roles(*roles: UserRole) -> Callable[..., Awaitable[CurrentUser]]:
    """
    Build a dependency that only admits requesters holding one of ``roles``.

    Usage:
        @router.get("/endpoint")
        async def endpoint(user: CurrentUser = Depends(require_roles(UserRole.ADMIN))):
            ...
    """
    allowed = " or ".join(role.value for role in roles)

    async def dependency(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in roles:
            logger.warning(f"Access denied: {user} requires role {allowed}")
            raise ForbiddenError(f"Access denied. Required role: {allowed}")
        return user

    return dependency


__all__ = [
    "CurrentUser",
    "get_current_user",
    "require_roles",
    "user_from_claims",
]
