"""Schemas for user profile and admin user management."""

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.auth import Role


class UserOut(BaseModel):
    """User as exposed over HTTP (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: Role


class UserCreatedResponse(BaseModel):
    """Response for POST /register and POST /users."""

    user: UserOut


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    username: str
    role: Role


class ProfileUpdateRequest(BaseModel):
    """Body for PUT /profile: replaces both username and password."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=1024)


class RoleUpdateRequest(BaseModel):
    role: Role
