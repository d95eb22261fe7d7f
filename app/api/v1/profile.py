"""Profile of the calling student."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from app.api.v1.auth import require_student
from app.core.database import get_db
from app.schemas.auth import Identity
from app.schemas.user import ProfileResponse, ProfileUpdateRequest
from app.services.users import get_user, update_profile

router = APIRouter()


@router.get("/profile", response_model=ProfileResponse)
def read_profile(
    identity: Annotated[Identity, Depends(require_student)],
    db: Annotated[Session, Depends(get_db)],
) -> ProfileResponse:
    """Return username and role of the token holder (404 if the account no longer exists)."""
    user = get_user(db, identity.id)
    return ProfileResponse.model_validate(user)


@router.put("/profile", response_class=PlainTextResponse)
def edit_profile(
    body: ProfileUpdateRequest,
    identity: Annotated[Identity, Depends(require_student)],
    db: Annotated[Session, Depends(get_db)],
) -> str:
    update_profile(db, identity.id, body.username, body.password)
    return "Profile updated successfully."
