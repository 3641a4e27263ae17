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
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_LIMIT = "INVALID_LIMIT"

    # Conflict errors (409)
    VIBE_ROOM_CONFLICT = "VIBE_ROOM_CONFLICT"
    ALREADY_IN_VIBE_ROOM = "ALREADY_IN_VIBE_ROOM"

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


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message="Profile not found",
            status_code=404,
            details={"user_id": user_id},
        )


class InvalidNearbyLimitError(AppException):
    """Nearby search limit must be positive."""

    def __init__(self, limit: int) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_LIMIT,
            message=f"Limit must be greater than zero, got {limit}",
            status_code=400,
            details={"limit": limit},
        )


class VibeRoomConflictError(AppException):
    """An active vibe room already exists for the locality and intent."""

    def __init__(self, city: str, country: str, intent: str) -> None:
        super().__init__(
            error_code=ErrorCode.VIBE_ROOM_CONFLICT,
            message="An active vibe room already exists for this city and intent",
            status_code=409,
            details={"city": city, "country": country, "intent": intent},
        )


class AlreadyInVibeRoomError(AppException):
    """User is already a member of a different vibe room."""

    def __init__(self, room_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_IN_VIBE_ROOM,
            message="Leave your current vibe room before joining another",
            status_code=409,
            details={"room_id": room_id},
        )
