"""Pydantic request/response schemas."""

from tasktracker.schemas.auth import AuthPayload, LoginRequest, RegisterRequest
from tasktracker.schemas.common import (
    ApiResponse,
    Pagination,
    TaskPagination,
    UserPagination,
)
from tasktracker.schemas.health import HealthStatus
from tasktracker.schemas.task import (
    AdminTaskOut,
    AdminTaskPage,
    TaskCreate,
    TaskOut,
    TaskPage,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
)
from tasktracker.schemas.user import (
    AdminUserUpdate,
    ProfileUpdate,
    UserOut,
    UserPage,
    UserRole,
)

__all__ = [
    "AdminTaskOut",
    "AdminTaskPage",
    "AdminUserUpdate",
    "ApiResponse",
    "AuthPayload",
    "HealthStatus",
    "LoginRequest",
    "Pagination",
    "ProfileUpdate",
    "RegisterRequest",
    "TaskCreate",
    "TaskOut",
    "TaskPage",
    "TaskPagination",
    "TaskPriority",
    "TaskStatus",
    "TaskUpdate",
    "UserOut",
    "UserPage",
    "UserPagination",
    "UserRole",
]
