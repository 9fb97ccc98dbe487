"""Task CRUD for the current user, plus the admin listing across all users."""

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from tasktracker.api.deps import AdminUser, CurrentUser, DbSession
from tasktracker.schemas.common import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_ID,
    MAX_PAGE_SIZE,
    ApiResponse,
    TaskPagination,
    page_bounds,
)
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
from tasktracker.services import tasks as task_service

router = APIRouter()

PageParam = Annotated[int, Query(ge=1)]
LimitParam = Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)]
StatusFilter = Annotated[TaskStatus | None, Query(alias="status")]
PriorityFilter = Annotated[TaskPriority | None, Query(alias="priority")]
TaskId = Annotated[int, Path(ge=1, le=MAX_ID)]


@router.get("", response_model=ApiResponse[TaskPage])
def list_tasks(
    current_user: CurrentUser,
    db: DbSession,
    page: PageParam = DEFAULT_PAGE,
    limit: LimitParam = DEFAULT_PAGE_SIZE,
    status_filter: StatusFilter = None,
    priority_filter: PriorityFilter = None,
) -> ApiResponse[TaskPage]:
    """
    List the caller's tasks, newest first.

    Optional status and priority filters must be valid values; totals are counted
    over the same filter.
    """
    tasks, total = task_service.list_tasks(
        db, current_user.id, page, limit, status_filter, priority_filter
    )
    return ApiResponse(
        data=TaskPage(
            tasks=[TaskOut.model_validate(t) for t in tasks],
            pagination=TaskPagination(total_tasks=total, **page_bounds(page, limit, total)),
        )
    )


# Declared before /{task_id} so the literal path wins.
@router.get("/admin/all", response_model=ApiResponse[AdminTaskPage])
def list_all_tasks(
    _admin: AdminUser,
    db: DbSession,
    page: PageParam = DEFAULT_PAGE,
    limit: LimitParam = DEFAULT_PAGE_SIZE,
    status_filter: StatusFilter = None,
    priority_filter: PriorityFilter = None,
) -> ApiResponse[AdminTaskPage]:
    """List tasks across all users with owner email and name (admin only)."""
    rows, total = task_service.list_all_tasks(db, page, limit, status_filter, priority_filter)
    items = [
        AdminTaskOut.model_validate(
            {
                **TaskOut.model_validate(task).model_dump(),
                "user_email": owner.email,
                "user_name": owner.full_name,
            }
        )
        for task, owner in rows
    ]
    return ApiResponse(
        data=AdminTaskPage(
            tasks=items,
            pagination=TaskPagination(total_tasks=total, **page_bounds(page, limit, total)),
        )
    )


@router.get("/{task_id}", response_model=ApiResponse[TaskOut])
def get_task(task_id: TaskId, current_user: CurrentUser, db: DbSession) -> ApiResponse[TaskOut]:
    """Return one of the caller's tasks; 404 if absent or owned by someone else."""
    task = task_service.get_owned_task(db, task_id, current_user.id)
    return ApiResponse(data=TaskOut.model_validate(task))


@router.post("", response_model=ApiResponse[TaskOut], status_code=status.HTTP_201_CREATED)
def create_task(body: TaskCreate, current_user: CurrentUser, db: DbSession) -> ApiResponse[TaskOut]:
    """Create a task owned by the caller. Status defaults to pending, priority to medium."""
    task = task_service.create_task(db, current_user.id, body)
    return ApiResponse(message="Task created successfully", data=TaskOut.model_validate(task))


@router.put("/{task_id}", response_model=ApiResponse[TaskOut])
def update_task(
    task_id: TaskId,
    body: TaskUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> ApiResponse[TaskOut]:
    """Update any subset of title, description, status and priority."""
    task = task_service.update_task(db, task_id, current_user.id, body.changes())
    return ApiResponse(message="Task updated successfully", data=TaskOut.model_validate(task))


@router.delete("/{task_id}", response_model=ApiResponse[None])
def delete_task(task_id: TaskId, current_user: CurrentUser, db: DbSession) -> ApiResponse[None]:
    """Delete one of the caller's tasks; no data in the response."""
    task_service.delete_task(db, task_id, current_user.id)
    return ApiResponse(message="Task deleted successfully")
