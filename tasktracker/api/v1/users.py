"""Profile endpoints for the current user and admin user management."""

from typing import Annotated

from fastapi import APIRouter, Path, Query

from tasktracker.api.deps import AdminUser, CurrentUser, DbSession
from tasktracker.schemas.common import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_ID,
    MAX_PAGE_SIZE,
    ApiResponse,
    UserPagination,
    page_bounds,
)
from tasktracker.schemas.user import AdminUserUpdate, ProfileUpdate, UserOut, UserPage
from tasktracker.services import users as user_service

router = APIRouter()


@router.get("/profile", response_model=ApiResponse[UserOut])
def get_profile(current_user: CurrentUser) -> ApiResponse[UserOut]:
    """Return the authenticated user's profile."""
    return ApiResponse(data=UserOut.model_validate(current_user))


@router.put("/profile", response_model=ApiResponse[UserOut])
def update_profile(
    body: ProfileUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> ApiResponse[UserOut]:
    """Update first and/or last name. Email, role and active flag are not self-editable."""
    changes = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    user = user_service.update_profile(db, current_user, changes)
    return ApiResponse(message="Profile updated successfully", data=UserOut.model_validate(user))


@router.get("", response_model=ApiResponse[UserPage])
def list_users(
    _admin: AdminUser,
    db: DbSession,
    page: Annotated[int, Query(ge=1)] = DEFAULT_PAGE,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
) -> ApiResponse[UserPage]:
    """List all users, newest first (admin only)."""
    users, total = user_service.list_users(db, page, limit)
    return ApiResponse(
        data=UserPage(
            users=[UserOut.model_validate(u) for u in users],
            pagination=UserPagination(total_users=total, **page_bounds(page, limit, total)),
        )
    )


@router.put("/{user_id}", response_model=ApiResponse[UserOut])
def update_user(
    user_id: Annotated[int, Path(ge=1, le=MAX_ID)],
    body: AdminUserUpdate,
    _admin: AdminUser,
    db: DbSession,
) -> ApiResponse[UserOut]:
    """Update another account's names, role or active flag (admin only)."""
    changes = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    user = user_service.admin_update_user(db, user_id, changes)
    return ApiResponse(message="User updated successfully", data=UserOut.model_validate(user))
