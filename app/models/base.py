"""SQLAlchemy declarative Base shared by the users and snippets tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
