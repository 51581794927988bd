"""Core app configuration and database."""

from biblioteca_auth.core.config import get_settings, settings
from biblioteca_auth.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
