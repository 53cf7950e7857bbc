"""
Pagination helpers shared by the paginated listings.
"""

import math

from masar.core.exceptions import InvalidInputError
from masar.modules.shared.schemas import CamelModel

DEFAULT_PAGE = 1
MAX_LIMIT = 100


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int

    @classmethod
    def for_page(cls, page: int, limit: int, total_items: int) -> "Pagination":
        return cls(
            current_page=page,
            total_pages=total_pages(total_items, limit),
            total_items=total_items,
            items_per_page=limit,
        )


def total_pages(total_items: int, limit: int) -> int:
    return math.ceil(total_items / limit) if limit > 0 else 0


def check_page_bounds(page: int, limit: int, max_limit: int = MAX_LIMIT) -> None:
    """
    Raises:
        InvalidInputError: If page < 1 or limit is outside 1..max_limit
    """
    if page < 1:
        raise InvalidInputError("Page must be at least 1")
    if not 1 <= limit <= max_limit:
        raise InvalidInputError(f"Limit must be between 1 and {max_limit}")
