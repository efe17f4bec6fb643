"""
Custom exceptions for the Workout Map app.

This module defines the exception hierarchy used across the workout
state-management subsystem. Each exception includes:
- A descriptive message
- An error code for API responses
- HTTP status code mapping
- Optional details for debugging
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent API error responses."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Workout collection errors
    WORKOUT_NOT_FOUND = "WORKOUT_NOT_FOUND"
    DUPLICATE_WORKOUT_ID = "DUPLICATE_WORKOUT_ID"

    # Persistence errors
    PERSISTENCE_CORRUPT = "PERSISTENCE_CORRUPT"
    STORAGE_ERROR = "STORAGE_ERROR"

    # Map errors
    POSITIONING_UNAVAILABLE = "POSITIONING_UNAVAILABLE"


class WorkoutMapError(Exception):
    """
    Base exception for all Workout Map errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        status_code: HTTP status code for API responses
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Validation Errors (400)
# ============================================================================

class InvalidInputError(WorkoutMapError):
    """Raised when a numeric field is not finite and strictly positive."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.INVALID_INPUT,
            status_code=400,
            details=error_details,
        )
        self.field = field


# ============================================================================
# Collection Errors (404 / 409)
# ============================================================================

class NotFoundError(WorkoutMapError):
    """Raised when an operation references an id absent from the store."""

    def __init__(self, workout_id: str, details: Optional[Dict[str, Any]] = None) -> None:
        error_details = details or {}
        error_details["workout_id"] = workout_id
        super().__init__(
            message=f"Workout with ID '{workout_id}' not found",
            code=ErrorCode.WORKOUT_NOT_FOUND,
            status_code=404,
            details=error_details,
        )
        self.workout_id = workout_id


class DuplicateIdError(WorkoutMapError):
    """Raised when a workout id is already present in the store."""

    def __init__(self, workout_id: str, details: Optional[Dict[str, Any]] = None) -> None:
        error_details = details or {}
        error_details["workout_id"] = workout_id
        super().__init__(
            message=f"Workout with ID '{workout_id}' already exists",
            code=ErrorCode.DUPLICATE_WORKOUT_ID,
            status_code=409,
            details=error_details,
        )
        self.workout_id = workout_id


# ============================================================================
# Persistence Errors
# ============================================================================

class PersistenceCorruptError(WorkoutMapError):
    """Raised when the stored payload cannot be parsed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.PERSISTENCE_CORRUPT,
            status_code=500,
            details=details,
        )


class StorageError(WorkoutMapError):
    """Raised when the key-value medium fails to read or write."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if operation:
            error_details["operation"] = operation
        super().__init__(
            message=message,
            code=ErrorCode.STORAGE_ERROR,
            status_code=503,
            details=error_details,
        )


# ============================================================================
# Map Errors
# ============================================================================

class PositioningUnavailableError(WorkoutMapError):
    """Raised when the user's position cannot be determined."""

    def __init__(
        self,
        message: str = "Could not get your position",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.POSITIONING_UNAVAILABLE,
            status_code=503,
            details=details,
        )
