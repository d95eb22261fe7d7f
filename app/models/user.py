"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import CheckConstraint, Column, Integer, String

from app.models.base import Base

ROLE_VALUES = ("student", "admin")


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'student' or 'admin'
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "role IN (" + ", ".join(f"'{r}'" for r in ROLE_VALUES) + ")",
            name="ck_users_role",
        ),
        # Ids of deleted users are never handed out again.
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="student")
