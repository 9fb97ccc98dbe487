"""Pydantic schemas for health check responses."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from tasktracker.schemas.common import ApiModel


class HealthStatus(ApiModel):
    """Liveness payload for the health check endpoint."""

    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Database connectivity status when check is performed",
    )
    timestamp: datetime
