"""Admin user management: list, create, change role, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from app.api.v1.auth import require_admin
from app.core.database import get_db
from app.schemas.auth import Identity, RegisterRequest
from app.schemas.user import RoleUpdateRequest, UserCreatedResponse, UserOut
from app.services.users import delete_user, list_users, register_user, update_role

router = APIRouter()


@router.get("/users", response_model=list[UserOut])
def get_users(
    _admin: Annotated[Identity, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserOut]:
    """List all users (admin only). Password hashes are never included."""
    return [UserOut.model_validate(u) for u in list_users(db)]


@router.post("/users", status_code=status.HTTP_201_CREATED, response_model=UserCreatedResponse)
def add_user(
    body: RegisterRequest,
    _admin: Annotated[Identity, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserCreatedResponse:
    user = register_user(db, body.username, body.password, body.role)
    return UserCreatedResponse(user=UserOut.model_validate(user))


@router.put("/user/{user_id}/role", response_class=PlainTextResponse)
def change_role(
    user_id: int,
    body: RoleUpdateRequest,
    _admin: Annotated[Identity, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> str:
    """
    Change a user's role. Takes effect at the user's next login: tokens already
    issued keep the role they were signed with until they expire.
    """
    update_role(db, user_id, body.role)
    return "User role updated successfully."


@router.delete("/user/{user_id}", response_class=PlainTextResponse)
def remove_user(
    user_id: int,
    _admin: Annotated[Identity, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> str:
    delete_user(db, user_id)
    return "User deleted successfully."
