"""User registration, login, profile and admin user management over the users table."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import store_failure
from app.core.errors import ErrorKind, ServiceError
from app.core.security import (
    HashFormatError,
    create_access_token,
    dummy_password_hash,
    hash_password,
    password_needs_rehash,
    verify_password,
)
from app.models import Snippet, User
from app.schemas.auth import LoginResponse, Role

logger = logging.getLogger(__name__)


def _ensure_known_role(user: User) -> User:
    """Rows written outside the app may carry a role this service does not know."""
    try:
        Role(user.role)
    except ValueError:
        logger.error("User id=%s has unknown role %r", user.id, user.role)
        raise ServiceError(
            ErrorKind.STORE_FAILURE, f"User {user.id} has unknown role {user.role!r}"
        )
    return user


def register_user(db: Session, username: str, password: str, role: Role) -> User:
    """
    Hash the password and insert a new user. Returns the persisted row.

    A duplicate username surfaces as STORE_FAILURE like any other persistence error.
    """
    user = User(
        username=username,
        password_hash=hash_password(password),
        role=Role(role).value,
    )
    try:
        db.add(user)
        db.commit()
    except SQLAlchemyError as e:
        raise store_failure(db, e, f"registering user {username!r}") from e
    db.refresh(user)
    logger.info("Registered user id=%s role=%s", user.id, user.role)
    return user


def authenticate_user(db: Session, username: str, password: str) -> User:
    """
    Return the user whose credentials match.

    Unknown username and wrong password raise the same CREDENTIAL_MISMATCH so callers
    cannot tell them apart.
    """
    try:
        user = db.query(User).filter(User.username == username).first()
    except SQLAlchemyError as e:
        raise store_failure(db, e, "looking up user for login") from e

    if user is None:
        # Same hashing work as a real check.
        verify_password(password, dummy_password_hash())
        logger.info("Login rejected: incorrect credentials")
        raise ServiceError(ErrorKind.CREDENTIAL_MISMATCH)

    try:
        matches = verify_password(password, user.password_hash)
    except HashFormatError:
        logger.error("User id=%s has an unusable password hash", user.id)
        matches = False
    if not matches:
        logger.info("Login rejected: incorrect credentials")
        raise ServiceError(ErrorKind.CREDENTIAL_MISMATCH)
    _ensure_known_role(user)

    if password_needs_rehash(user.password_hash):
        user.password_hash = hash_password(password)
        try:
            db.commit()
        except SQLAlchemyError as e:
            raise store_failure(db, e, "upgrading password hash") from e
        logger.info("Upgraded password hash parameters for user id=%s", user.id)
    return user


def issue_login_token(user: User) -> LoginResponse:
    """Sign a token for the authenticated user; the role is frozen into it until expiry."""
    role = Role(user.role)
    return LoginResponse(token=create_access_token(user.id, role), role=role)


def get_user(db: Session, user_id: int) -> User:
    try:
        user = db.query(User).filter(User.id == user_id).first()
    except SQLAlchemyError as e:
        raise store_failure(db, e, "loading user") from e
    if user is None:
        raise ServiceError(ErrorKind.RESOURCE_NOT_FOUND, "User not found")
    return _ensure_known_role(user)


def update_profile(db: Session, user_id: int, username: str, password: str) -> None:
    """Replace username and password of the given user."""
    password_hash = hash_password(password)
    try:
        db.query(User).filter(User.id == user_id).update(
            {User.username: username, User.password_hash: password_hash},
            synchronize_session=False,
        )
        db.commit()
    except SQLAlchemyError as e:
        raise store_failure(db, e, "updating profile") from e


def list_users(db: Session) -> list[User]:
    try:
        users = db.query(User).order_by(User.id).all()
    except SQLAlchemyError as e:
        raise store_failure(db, e, "listing users") from e
    return [_ensure_known_role(u) for u in users]


def update_role(db: Session, user_id: int, role: Role) -> int:
    """
    Set a user's role. Returns the number of rows changed (0 if the id is unknown).

    Tokens already issued keep the old role until they expire.
    """
    try:
        changed = (
            db.query(User)
            .filter(User.id == user_id)
            .update({User.role: Role(role).value}, synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        raise store_failure(db, e, "updating role") from e
    logger.info("Role update: user_id=%s role=%s rows=%s", user_id, Role(role).value, changed)
    return changed


def delete_user(db: Session, user_id: int) -> int:
    """Delete a user and their snippets in one transaction. Returns user rows deleted."""
    try:
        snippets_deleted = (
            db.query(Snippet)
            .filter(Snippet.author_id == user_id)
            .delete(synchronize_session=False)
        )
        deleted = (
            db.query(User)
            .filter(User.id == user_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        raise store_failure(db, e, "deleting user") from e
    logger.info(
        "User delete: user_id=%s rows=%s snippets_deleted=%s", user_id, deleted, snippets_deleted
    )
    return deleted
