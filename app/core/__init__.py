"""Core app configuration, database, security and error kinds."""

from app.core.config import get_settings, settings
from app.core.database import get_db
from app.core.errors import ErrorKind, ServiceError

__all__ = ["ErrorKind", "ServiceError", "get_db", "get_settings", "settings"]
