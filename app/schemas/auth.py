"""Request/response schemas for registration, login and the token identity."""

from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Closed set of roles a user can hold."""

    STUDENT = "student"
    ADMIN = "admin"


class Identity(BaseModel):
    """Caller identity recovered from a verified bearer token (never from the database)."""

    id: int
    role: Role


class RegisterRequest(BaseModel):
    """Body for POST /register and POST /users."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=1024, description="Password")
    role: Role = Field(..., description="Role granted to the new user")


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=1024, description="Password")


class LoginResponse(BaseModel):
    """Signed bearer token returned after successful login, plus the role it carries."""

    token: str = Field(..., description="JWT access token; send as 'Authorization: Bearer <token>'")
    role: Role
