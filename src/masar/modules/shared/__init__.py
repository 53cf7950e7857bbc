"""
Shared building blocks for module models and schemas.
"""

from masar.modules.shared.models import BaseModel
from masar.modules.shared.schemas import ApiResponse, CamelModel

__all__ = ["BaseModel", "ApiResponse", "CamelModel"]
