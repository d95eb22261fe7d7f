"""Snippet routes: public listing, authenticated creation, owner-or-admin edit and delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from app.api.v1.auth import require_writer
from app.core.database import get_db
from app.schemas.auth import Identity
from app.schemas.snippet import SnippetIn, SnippetOut
from app.services.snippets import (
    create_snippet,
    delete_snippet,
    list_snippets,
    update_snippet,
)

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SnippetOut)
def post_snippet(
    body: SnippetIn,
    identity: Annotated[Identity, Depends(require_writer)],
    db: Annotated[Session, Depends(get_db)],
) -> SnippetOut:
    snippet = create_snippet(db, identity.id, body.content)
    return SnippetOut.model_validate(snippet)


@router.get("", response_model=list[SnippetOut])
def get_snippets(db: Annotated[Session, Depends(get_db)]) -> list[SnippetOut]:
    """All snippets, newest first. Public."""
    return [SnippetOut.model_validate(s) for s in list_snippets(db)]


@router.put("/{snippet_id}", response_class=PlainTextResponse)
def put_snippet(
    snippet_id: int,
    body: SnippetIn,
    identity: Annotated[Identity, Depends(require_writer)],
    db: Annotated[Session, Depends(get_db)],
) -> str:
    """Edit content. 404 if the snippet does not exist, 403 if the caller is neither author nor admin."""
    update_snippet(db, identity, snippet_id, body.content)
    return "Snippet updated successfully."


@router.delete("/{snippet_id}", response_class=PlainTextResponse)
def remove_snippet(
    snippet_id: int,
    identity: Annotated[Identity, Depends(require_writer)],
    db: Annotated[Session, Depends(get_db)],
) -> str:
    delete_snippet(db, identity, snippet_id)
    return "Snippet deleted successfully."
