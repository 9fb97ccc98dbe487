"""Shared schema pieces: camelCase base model, response envelope and pagination block."""

from math import ceil
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Primary keys are 32-bit INTEGER columns.
MAX_ID = 2_147_483_647


class ApiModel(BaseModel):
    """Base for API bodies: camelCase on the wire, snake_case (or camelCase) accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Uniform response envelope: {status, message?, data?}."""

    status: Literal["success", "error"] = "success"
    message: str | None = None
    data: T | None = None


class Pagination(ApiModel):
    """Paging metadata computed from a count over the same filter as the page query."""

    current_page: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)
    has_next_page: bool
    has_prev_page: bool


class TaskPagination(Pagination):
    total_tasks: int = Field(..., ge=0)


class UserPagination(Pagination):
    total_users: int = Field(..., ge=0)


def page_offset(page: int, limit: int) -> int:
    """Row offset of the first item on a 1-based page."""
    return (page - 1) * limit


def page_bounds(page: int, limit: int, total: int) -> dict[str, int | bool]:
    """Common pagination fields for a page of size limit over total rows."""
    total_pages = ceil(total / limit) if limit else 0
    return {
        "current_page": page,
        "total_pages": total_pages,
        "has_next_page": page < total_pages,
        "has_prev_page": page > 1,
    }
