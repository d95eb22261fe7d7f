"""Shared test wiring: the real app backed by a private in-memory SQLite database."""

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import enable_sqlite_foreign_keys, get_db
from app.core.security import create_access_token
from app.main import app
from app.models import Base
from app.schemas.auth import Role


def make_test_client() -> tuple[TestClient, sessionmaker]:
    """Create schema in a fresh in-memory DB and point get_db at it."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app), TestingSession


def reset_overrides() -> None:
    app.dependency_overrides.clear()


def bearer(user_id: int, role: Role) -> dict[str, str]:
    """Authorization header for a freshly signed token."""
    return {"Authorization": f"Bearer {create_access_token(user_id, role)}"}
