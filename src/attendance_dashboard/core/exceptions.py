from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid, before anything is sent out."""


class AuthenticationError(DomainError):
    """Raised when there is no valid bearer token (missing, expired, 401)."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ActionInProgressError(DomainError):
    """Raised when an action is triggered again while its call is outstanding."""


class ServiceError(DomainError):
    """Non-2xx answer from the attendance service.

    ``str(err)`` is the service message verbatim so it can be shown as is.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(ServiceError):
    """HTTP 404. Report and punch loaders treat it as an empty result."""


class ServiceTimeoutError(ServiceError):
    """The service did not answer within the configured timeout."""

    retryable = True
