"""Health check endpoint with database connectivity check."""

from datetime import UTC, datetime

from fastapi import APIRouter

from tasktracker.api.deps import DbSession
from tasktracker.core.config import settings
from tasktracker.core.database import check_db_connected
from tasktracker.schemas.common import ApiResponse
from tasktracker.schemas.health import HealthStatus

router = APIRouter()


@router.get("", response_model=ApiResponse[HealthStatus])
def get_health(db: DbSession) -> ApiResponse[HealthStatus]:
    """
    Return a liveness marker plus database connectivity.
    Used by load balancers and monitoring; no authentication.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"
    return ApiResponse(
        message="Server is running",
        data=HealthStatus(
            environment=settings.APP_ENV,
            database=db_status,
            timestamp=datetime.now(UTC),
        ),
    )
