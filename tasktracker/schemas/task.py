"""Request/response schemas for tasks."""

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from tasktracker.schemas.common import ApiModel, TaskPagination

TaskStatus = Literal["pending", "in_progress", "completed"]
TaskPriority = Literal["low", "medium", "high"]

TITLE_MAX_LEN = 255
DESCRIPTION_MAX_LEN = 5000


def _clean_title(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    if not stripped:
        raise ValueError("title must not be empty")
    return stripped


class TaskCreate(ApiModel):
    """New task; only the title is required."""

    title: str = Field(..., max_length=TITLE_MAX_LEN)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LEN)
    status: TaskStatus = "pending"
    priority: TaskPriority = "medium"

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _clean_title(v)


class TaskUpdate(ApiModel):
    """
    Partial update. Only fields present in the request body are applied.

    description may be sent as null to clear it; null title/status/priority count as absent.
    """

    title: str | None = Field(default=None, max_length=TITLE_MAX_LEN)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LEN)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return _clean_title(v)

    def changes(self) -> dict[str, str | None]:
        """Fields to write: explicitly supplied, minus nulls for non-nullable columns."""
        supplied = self.model_dump(exclude_unset=True)
        return {
            name: value
            for name, value in supplied.items()
            if value is not None or name == "description"
        }


class TaskOut(ApiModel):
    id: int
    title: str
    description: str | None = None
    status: TaskStatus
    priority: TaskPriority
    user_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AdminTaskOut(TaskOut):
    """Task with owner identity, for the cross-user admin listing."""

    user_email: str
    user_name: str


class TaskPage(ApiModel):
    tasks: list[TaskOut]
    pagination: TaskPagination


class AdminTaskPage(ApiModel):
    tasks: list[AdminTaskOut]
    pagination: TaskPagination
