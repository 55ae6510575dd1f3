"""Core app configuration and database."""

from iacp.core.config import get_settings, settings
from iacp.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
