"""Core app configuration, database and error handling."""

from tasktracker.core.config import get_settings, settings
from tasktracker.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
