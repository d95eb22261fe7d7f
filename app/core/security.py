"""Password hashing (Argon2id) and JWT creation/verification for authentication."""

import logging
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import TYPE_CHECKING, Any

import jwt
from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHashError, VerificationError

from app.core.config import settings as default_settings
from app.core.errors import ErrorKind, ServiceError
from app.schemas.auth import Identity, Role

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


class HashFormatError(ValueError):
    """Stored password hash is not something a hash could ever be (e.g. not a string)."""


def _password_hasher(settings: "Settings | None" = None) -> PasswordHasher:
    s = settings or default_settings
    return PasswordHasher(
        time_cost=s.ARGON2_TIME_COST,
        memory_cost=s.ARGON2_MEMORY_COST_KIB,
        parallelism=s.ARGON2_PARALLELISM,
        type=Type.ID,
    )


def hash_password(plain_password: str, settings: "Settings | None" = None) -> str:
    """Hash a plain-text password for storage. Salt is random per call and embedded in the result."""
    return _password_hasher(settings).hash(plain_password)


def verify_password(
    plain_password: str, hashed: str, settings: "Settings | None" = None
) -> bool:
    """
    Verify a plain password against a stored Argon2 hash.

    Returns False on mismatch and on a malformed hash string.
    Raises HashFormatError if the stored value is not a string at all.
    """
    if not isinstance(hashed, str):
        raise HashFormatError(f"Stored password hash must be str, got {type(hashed).__name__}")
    try:
        return _password_hasher(settings).verify(hashed, plain_password)
    except InvalidHashError:
        logger.warning("Stored password hash is malformed; treating as mismatch")
        return False
    except VerificationError:
        return False


def password_needs_rehash(hashed: str, settings: "Settings | None" = None) -> bool:
    """True when the hash was made with cost parameters other than the configured ones."""
    try:
        return _password_hasher(settings).check_needs_rehash(hashed)
    except (InvalidHashError, ValueError):
        return False


@lru_cache
def dummy_password_hash() -> str:
    """Hash verified against when a login names an unknown user, so both paths cost the same."""
    return hash_password("dummy-password-for-unknown-users")


def create_access_token(
    user_id: int,
    role: Role | str,
    *,
    now: datetime | None = None,
    settings: "Settings | None" = None,
) -> str:
    """Create a signed JWT carrying sub (user id), role, iat and exp = iat + JWT_EXPIRE_MINUTES."""
    s = settings or default_settings
    issued_at = now or datetime.now(UTC)
    expire = issued_at + timedelta(minutes=s.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "role": Role(role).value,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(
        payload,
        s.JWT_SECRET.get_secret_value(),
        algorithm=s.JWT_ALGORITHM,
    )


def decode_access_token(
    token: str | None, *, settings: "Settings | None" = None
) -> Identity:
    """
    Verify signature and expiry of a JWT and return the identity it carries.

    Raises ServiceError(TOKEN_INVALID_OR_EXPIRED) for a missing, tampered, expired
    or structurally unusable token.
    """
    if not token:
        raise ServiceError(ErrorKind.TOKEN_INVALID_OR_EXPIRED)
    s = settings or default_settings
    try:
        payload = jwt.decode(
            token,
            s.JWT_SECRET.get_secret_value(),
            algorithms=[s.JWT_ALGORITHM],
            options={"require": ["sub", "role", "iat", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        logger.debug("Rejected expired token")
        raise ServiceError(ErrorKind.TOKEN_INVALID_OR_EXPIRED)
    except jwt.PyJWTError as e:
        logger.debug("Rejected invalid token: %s", e)
        raise ServiceError(ErrorKind.TOKEN_INVALID_OR_EXPIRED)
    try:
        return Identity(id=int(payload["sub"]), role=payload["role"])
    except (TypeError, ValueError):
        raise ServiceError(ErrorKind.TOKEN_INVALID_OR_EXPIRED)
