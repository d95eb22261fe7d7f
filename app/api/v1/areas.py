"""Role-gated placeholder areas for admins and students."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from app.api.v1.auth import require_admin, require_student
from app.schemas.auth import Identity

router = APIRouter()


@router.get("/some-admin-route", response_class=PlainTextResponse)
def admin_area(_admin: Annotated[Identity, Depends(require_admin)]) -> str:
    return "Admin content"


@router.get("/some-student-route", response_class=PlainTextResponse)
def student_area(_student: Annotated[Identity, Depends(require_student)]) -> str:
    return "Student content"
