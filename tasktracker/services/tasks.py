"""Task store operations, scoped to an owner unless called from an admin listing."""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from tasktracker.core.errors import BadRequest, NotFound
from tasktracker.models import Task, User
from tasktracker.schemas.common import page_offset
from tasktracker.schemas.task import TaskCreate

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"


def task_filters(
    owner_id: int | None = None,
    status: str | None = None,
    priority: str | None = None,
) -> list[ColumnElement[bool]]:
    """Bound-parameter predicates for whichever optional filters are present."""
    clauses: list[ColumnElement[bool]] = []
    if owner_id is not None:
        clauses.append(Task.user_id == owner_id)
    if status is not None:
        clauses.append(Task.status == status)
    if priority is not None:
        clauses.append(Task.priority == priority)
    return clauses


def list_tasks(
    db: Session,
    owner_id: int,
    page: int,
    limit: int,
    status: str | None = None,
    priority: str | None = None,
) -> tuple[list[Task], int]:
    """One page of the owner's tasks, newest first, plus the count over the same filter."""
    clauses = task_filters(owner_id, status, priority)
    total = db.query(func.count(Task.id)).filter(*clauses).scalar() or 0
    tasks = (
        db.query(Task)
        .filter(*clauses)
        .order_by(Task.created_at.desc(), Task.id.desc())
        .offset(page_offset(page, limit))
        .limit(limit)
        .all()
    )
    return tasks, total


def list_all_tasks(
    db: Session,
    page: int,
    limit: int,
    status: str | None = None,
    priority: str | None = None,
) -> tuple[list[tuple[Task, User]], int]:
    """One page of tasks across all users, each paired with its owner."""
    clauses = task_filters(None, status, priority)
    total = db.query(func.count(Task.id)).filter(*clauses).scalar() or 0
    rows = (
        db.query(Task, User)
        .join(User, Task.user_id == User.id)
        .filter(*clauses)
        .order_by(Task.created_at.desc(), Task.id.desc())
        .offset(page_offset(page, limit))
        .limit(limit)
        .all()
    )
    return [(task, owner) for task, owner in rows], total


def get_owned_task(db: Session, task_id: int, owner_id: int) -> Task:
    """Return the task if it exists and belongs to owner_id; NotFound otherwise (never Forbidden)."""
    task = (
        db.query(Task)
        .filter(Task.id == task_id, Task.user_id == owner_id)
        .first()
    )
    if task is None:
        raise NotFound(TASK_NOT_FOUND)
    return task


def create_task(db: Session, owner_id: int, body: TaskCreate) -> Task:
    task = Task(
        title=body.title,
        description=body.description,
        status=body.status,
        priority=body.priority,
        user_id=owner_id,
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    logger.info("Task created", extra={"task_id": task.id, "user_id": owner_id})
    return task


def update_task(
    db: Session,
    task_id: int,
    owner_id: int,
    changes: dict[str, str | None],
) -> Task:
    """
    Apply a partial update in one UPDATE statement scoped to the owner.

    Concurrent updates are last-writer-wins. Unsupplied fields keep their values.
    """
    if not changes:
        get_owned_task(db, task_id, owner_id)
        raise BadRequest("No fields to update")
    updated = (
        db.query(Task)
        .filter(*task_filters(owner_id), Task.id == task_id)
        .update({**changes, "updated_at": func.now()}, synchronize_session=False)
    )
    if updated == 0:
        db.rollback()
        raise NotFound(TASK_NOT_FOUND)
    db.commit()
    return get_owned_task(db, task_id, owner_id)


def delete_task(db: Session, task_id: int, owner_id: int) -> None:
    deleted = (
        db.query(Task)
        .filter(*task_filters(owner_id), Task.id == task_id)
        .delete(synchronize_session=False)
    )
    if deleted == 0:
        db.rollback()
        raise NotFound(TASK_NOT_FOUND)
    db.commit()
    logger.info("Task deleted", extra={"task_id": task_id, "user_id": owner_id})
