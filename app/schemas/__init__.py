"""Pydantic request/response schemas."""

from app.schemas.auth import Identity, LoginRequest, LoginResponse, RegisterRequest, Role
from app.schemas.health import HealthResponse
from app.schemas.snippet import SnippetIn, SnippetOut
from app.schemas.user import (
    ProfileResponse,
    ProfileUpdateRequest,
    RoleUpdateRequest,
    UserCreatedResponse,
    UserOut,
)

__all__ = [
    "HealthResponse",
    "Identity",
    "LoginRequest",
    "LoginResponse",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "RegisterRequest",
    "Role",
    "RoleUpdateRequest",
    "SnippetIn",
    "SnippetOut",
    "UserCreatedResponse",
    "UserOut",
]
