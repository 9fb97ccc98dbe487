"""Request/response schemas for user profiles and admin user management."""

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from tasktracker.core.security import NAME_MAX_LEN, NAME_MIN_LEN
from tasktracker.schemas.common import ApiModel, UserPagination

UserRole = Literal["user", "admin"]


def strip_name(value: str) -> str:
    """Trim a first or last name; a name that is only whitespace is rejected."""
    stripped = value.strip()
    if not stripped:
        raise ValueError("name must not be blank")
    return stripped


class UserOut(ApiModel):
    """User as returned by the API (never includes the password hash)."""

    id: int
    email: str
    first_name: str
    last_name: str
    role: UserRole
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileUpdate(ApiModel):
    """Self-service profile update: name fields only."""

    first_name: str | None = Field(default=None, min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    last_name: str | None = Field(default=None, min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)

    @field_validator("first_name", "last_name")
    @classmethod
    def clean_name(cls, v: str | None) -> str | None:
        return None if v is None else strip_name(v)


class AdminUserUpdate(ProfileUpdate):
    """Admin update of another account: names, role and active flag."""

    role: UserRole | None = None
    is_active: bool | None = None


class UserPage(ApiModel):
    users: list[UserOut]
    pagination: UserPagination
