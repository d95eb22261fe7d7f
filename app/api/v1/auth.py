"""Registration and login routes, plus the bearer-token access control dependencies."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import ErrorKind, ServiceError
from app.core.security import decode_access_token
from app.schemas.auth import Identity, LoginRequest, LoginResponse, RegisterRequest, Role
from app.schemas.user import UserCreatedResponse, UserOut
from app.services.users import authenticate_user, issue_login_token, register_user

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Identity:
    """
    Dependency: verify the Bearer JWT and return the identity it carries.

    A missing or malformed Authorization header counts as an invalid token (403).
    """
    token = credentials.credentials if credentials is not None else None
    return decode_access_token(token)


def require_roles(*roles: Role) -> Callable[..., Identity]:
    """
    Build a dependency admitting only identities whose token role is in roles.

    With no roles, any authenticated identity is admitted. A verified token with a
    role outside the set is rejected with ROLE_NOT_PERMITTED (401).
    """
    allowed = frozenset(roles)

    def dependency(identity: Annotated[Identity, Depends(get_identity)]) -> Identity:
        if allowed and identity.role not in allowed:
            raise ServiceError(ErrorKind.ROLE_NOT_PERMITTED)
        return identity

    return dependency


require_student = require_roles(Role.STUDENT)
require_admin = require_roles(Role.ADMIN)
require_writer = require_roles(Role.STUDENT, Role.ADMIN)


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=UserCreatedResponse)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserCreatedResponse:
    """Create an account. Public."""
    user = register_user(db, body.username, body.password, body.role)
    return UserCreatedResponse(user=UserOut.model_validate(user))


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT valid for one hour and the role it carries.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = authenticate_user(db, body.username, body.password)
    return issue_login_token(user)
