"""Authentication module."""

from masar.modules.auth.router import router
from masar.modules.auth.schemas import LoginResponse

__all__ = ["router", "LoginResponse"]
