import math

from pydantic import BaseModel

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class PaginationMetadata(BaseModel):
    """Pagination metadata for list responses"""

    page: int
    limit: int
    total: int
    pages: int
    has_next: bool
    has_prev: bool


def page_offset(page: int, limit: int) -> int:
    """Offset of the first row on a 1-based page."""
    return (page - 1) * limit


def build_pagination(page: int, limit: int, total: int) -> PaginationMetadata:
    total_pages = math.ceil(total / limit) if total > 0 else 1
    return PaginationMetadata(
        page=page,
        limit=limit,
        total=total,
        pages=total_pages,
        has_next=page * limit < total,
        has_prev=page > 1,
    )
