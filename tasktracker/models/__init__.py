"""SQLAlchemy ORM models."""

from tasktracker.models.base import Base
from tasktracker.models.task import TASK_PRIORITIES, TASK_STATUSES, Task
from tasktracker.models.user import USER_ROLES, User

__all__ = ["Base", "Task", "TASK_PRIORITIES", "TASK_STATUSES", "User", "USER_ROLES"]
