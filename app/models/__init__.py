"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.snippet import Snippet
from app.models.user import ROLE_VALUES, User

__all__ = ["Base", "ROLE_VALUES", "Snippet", "User"]
