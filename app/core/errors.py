"""Error kinds raised by services and the single table mapping them to HTTP status codes."""

import logging
from enum import Enum

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Every failure a service can report to the HTTP layer."""

    VALIDATION_FAILURE = "validation_failure"
    CREDENTIAL_MISMATCH = "credential_mismatch"
    TOKEN_INVALID_OR_EXPIRED = "token_invalid_or_expired"
    ROLE_NOT_PERMITTED = "role_not_permitted"
    RESOURCE_NOT_FOUND = "resource_not_found"
    OWNERSHIP_VIOLATION = "ownership_violation"
    STORE_FAILURE = "store_failure"


# Invalid/expired token is 403; a valid token with the wrong role is 401.
STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION_FAILURE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.CREDENTIAL_MISMATCH: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.TOKEN_INVALID_OR_EXPIRED: status.HTTP_403_FORBIDDEN,
    ErrorKind.ROLE_NOT_PERMITTED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.RESOURCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.OWNERSHIP_VIOLATION: status.HTTP_403_FORBIDDEN,
    ErrorKind.STORE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.VALIDATION_FAILURE: "Invalid request",
    ErrorKind.CREDENTIAL_MISMATCH: "Username or password is incorrect",
    ErrorKind.TOKEN_INVALID_OR_EXPIRED: "Token is invalid or expired",
    ErrorKind.ROLE_NOT_PERMITTED: "Unauthorized",
    ErrorKind.RESOURCE_NOT_FOUND: "Not found",
    ErrorKind.OWNERSHIP_VIOLATION: "Unauthorized",
    ErrorKind.STORE_FAILURE: "Internal server error",
}


class ServiceError(Exception):
    """Raised by services and auth dependencies; carries an ErrorKind and a client-facing message."""

    def __init__(self, kind: ErrorKind, message: str | None = None) -> None:
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Translate a ServiceError into its mapped status code."""
    if exc.kind is ErrorKind.STORE_FAILURE:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "kind": exc.kind.value},
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies and parameters are VALIDATION_FAILURE; detail keeps the per-field errors."""
    kind = ErrorKind.VALIDATION_FAILURE
    return JSONResponse(
        status_code=STATUS_BY_KIND[kind],
        content={"detail": jsonable_encoder(exc.errors()), "kind": kind.value},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
