"""Interface layer error translation.

Maps domain and infrastructure errors to HTTP status codes and the
message returned to callers. Upstream failures get a generic message;
their details only reach the logs.
"""

import logging

from fastapi import status

from portal.adapter.error import AdapterError
from portal.domain.error import (
    AllocationExhaustedError,
    DomainError,
    InvalidCredentialsError,
    InvalidReturnUrlError,
    InviteCodeAlreadyUsedOrNotFoundError,
    InviteCodeError,
    MissingFieldError,
    NotAuthenticatedError,
    RegistrationRejectedError,
    TokenInvalidOrExpiredError,
    UnauthorizedOriginError,
    UnknownActionError,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
INVALID_REQUEST_MESSAGE = "Invalid request body"

# Checked in order, so subclasses come before their bases
_STATUS_BY_ERROR: list[tuple[type[Exception], int]] = [
    (UnauthorizedOriginError, status.HTTP_403_FORBIDDEN),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (TokenInvalidOrExpiredError, status.HTTP_401_UNAUTHORIZED),
    (NotAuthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (UnknownActionError, status.HTTP_400_BAD_REQUEST),
    (InvalidReturnUrlError, status.HTTP_400_BAD_REQUEST),
    (MissingFieldError, status.HTTP_400_BAD_REQUEST),
    (RegistrationRejectedError, status.HTTP_400_BAD_REQUEST),
    (InviteCodeAlreadyUsedOrNotFoundError, status.HTTP_409_CONFLICT),
    (AllocationExhaustedError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (InviteCodeError, status.HTTP_400_BAD_REQUEST),
]


class InterfaceError(Exception):
    """Base interface error."""

    pass


class InvalidRequestBodyError(InterfaceError):
    """Request body is not a JSON object or fails validation."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(INVALID_REQUEST_MESSAGE)


def error_response(exc: Exception) -> tuple[int, str]:
    """Translate an error to (status code, caller-facing message).

    Args:
        exc: Error raised while handling a request

    Returns:
        HTTP status code and message
    """
    if isinstance(exc, InvalidRequestBodyError):
        return status.HTTP_400_BAD_REQUEST, str(exc)

    if isinstance(exc, DomainError):
        for error_type, status_code in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                if status_code >= 500:
                    logger.error(f"Request failed: {exc}")
                return status_code, str(exc)
        return status.HTTP_400_BAD_REQUEST, str(exc)

    if isinstance(exc, AdapterError):
        logger.error(f"Upstream failure: {type(exc).__name__}: {exc}")
    else:
        logger.exception("Unexpected error while handling request")
    return status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE
