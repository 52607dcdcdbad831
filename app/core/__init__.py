"""Core app configuration, context and database."""

from app.core.config import Settings, get_settings
from app.core.context import AppContext
from app.core.database import get_db

__all__ = ["AppContext", "Settings", "get_settings", "get_db"]
