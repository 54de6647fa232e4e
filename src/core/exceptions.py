"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    SMELL_NOT_FOUND = "SMELL_NOT_FOUND"

    # Validation errors (400/422)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Conflict errors (409)
    ALREADY_FAVORITED = "ALREADY_FAVORITED"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class UserNotFoundError(AppException):
    """User profile not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message="User not found",
            status_code=404,
            details={"user_id": user_id},
        )


class SmellNotFoundError(AppException):
    """Catalog smell not found."""

    def __init__(self, smell_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.SMELL_NOT_FOUND,
            message=f"Smell not found: {smell_id}",
            status_code=404,
            details={"smell_id": smell_id},
        )


class AlreadyFavoritedError(AppException):
    """The (user, smell) favorite edge already exists."""

    def __init__(self, smell_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_FAVORITED,
            message="Already in favorites",
            status_code=409,
            details={"smell_id": smell_id},
        )
