"""Error taxonomy shared by the service layer and the HTTP boundary.

Service operations raise a ServiceError subclass; each carries an ErrorCode
and a client-safe message. The HTTP layer (accountd.api.errors) owns the
code → status mapping, so nothing here knows about HTTP.
"""

import enum
from typing import Optional


class ErrorCode(str, enum.Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    EMAIL_NOT_FOUND = "EMAIL_NOT_FOUND"
    BAD_PASSWORD = "BAD_PASSWORD"
    INVALID_TOKEN = "INVALID_TOKEN"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ServiceError(Exception):
    """Base for every failure that is reported to the client."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(ServiceError):
    code = ErrorCode.VALIDATION_ERROR
    default_message = "Requirement missing"


class DuplicateEmailError(ServiceError):
    code = ErrorCode.DUPLICATE_EMAIL
    default_message = "Email is already registered"


class EmailNotFoundError(ServiceError):
    code = ErrorCode.EMAIL_NOT_FOUND
    default_message = "Email not found"


class BadPasswordError(ServiceError):
    code = ErrorCode.BAD_PASSWORD
    default_message = "Incorrect password"


class InvalidTokenError(ServiceError):
    """Any auth failure on a protected route. Deliberately uninformative."""

    code = ErrorCode.INVALID_TOKEN
    default_message = "Invalid token"


class InternalError(ServiceError):
    code = ErrorCode.INTERNAL_ERROR
    default_message = "Internal server error"
