"""API v1 routes."""

from fastapi import APIRouter

from tasktracker.api.v1 import auth, tasks, users

router = APIRouter()
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
