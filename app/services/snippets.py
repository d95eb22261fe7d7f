"""Snippet persistence and the ownership rule for editing or deleting a snippet."""

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import store_failure
from app.core.errors import ErrorKind, ServiceError
from app.models import Snippet
from app.schemas.auth import Identity, Role

logger = logging.getLogger(__name__)


def can_modify_snippet(identity: Identity, snippet: Snippet) -> bool:
    """The author and any admin may modify a snippet; nobody else."""
    return identity.id == snippet.author_id or identity.role == Role.ADMIN


def authorize_snippet_mutation(identity: Identity, snippet: Snippet) -> None:
    """Raise OWNERSHIP_VIOLATION unless the identity may modify the snippet."""
    if not can_modify_snippet(identity, snippet):
        logger.info(
            "Ownership check failed: user_id=%s snippet_id=%s author_id=%s",
            identity.id,
            snippet.id,
            snippet.author_id,
        )
        raise ServiceError(ErrorKind.OWNERSHIP_VIOLATION)


def create_snippet(db: Session, author_id: int, content: str) -> Snippet:
    snippet = Snippet(author_id=author_id, content=content)
    try:
        db.add(snippet)
        db.commit()
    except SQLAlchemyError as e:
        raise store_failure(db, e, "creating snippet") from e
    db.refresh(snippet)
    return snippet


def list_snippets(db: Session) -> list[Snippet]:
    """All snippets, newest first."""
    try:
        return (
            db.query(Snippet)
            .order_by(Snippet.created_at.desc(), Snippet.id.desc())
            .all()
        )
    except SQLAlchemyError as e:
        raise store_failure(db, e, "listing snippets") from e


def get_snippet(db: Session, snippet_id: int) -> Snippet:
    """Load a snippet or raise RESOURCE_NOT_FOUND."""
    try:
        snippet = db.query(Snippet).filter(Snippet.id == snippet_id).first()
    except SQLAlchemyError as e:
        raise store_failure(db, e, "loading snippet") from e
    if snippet is None:
        raise ServiceError(ErrorKind.RESOURCE_NOT_FOUND, "Snippet not found")
    return snippet


def update_snippet(db: Session, identity: Identity, snippet_id: int, content: str) -> Snippet:
    """Existence is checked before ownership: a missing snippet is 404 for everyone."""
    snippet = get_snippet(db, snippet_id)
    authorize_snippet_mutation(identity, snippet)
    snippet.content = content
    snippet.updated_at = datetime.now(timezone.utc)
    try:
        db.commit()
    except SQLAlchemyError as e:
        raise store_failure(db, e, "updating snippet") from e
    return snippet


def delete_snippet(db: Session, identity: Identity, snippet_id: int) -> None:
    snippet = get_snippet(db, snippet_id)
    authorize_snippet_mutation(identity, snippet)
    try:
        db.delete(snippet)
        db.commit()
    except SQLAlchemyError as e:
        raise store_failure(db, e, "deleting snippet") from e
    logger.info("Snippet deleted: snippet_id=%s by user_id=%s", snippet_id, identity.id)
