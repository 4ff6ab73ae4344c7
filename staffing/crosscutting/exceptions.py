"""
Name: Custom Exceptions

Responsibilities:
  - Define typed errors for storage and scheduling operations
  - Provide a stable error_code per category and an error_id for log correlation

Collaborators:
  - infrastructure.storage / infrastructure.repositories: storage errors
  - application.services: domain errors (not found, forbidden, validation)
  - callers (HTTP layer) map error_code to user-facing responses

Notes:
  - "Record not found" on find/update/delete is NOT an exception; those
    operations return None/False. NotFoundError is for domain operations
    that require a target (e.g. signing up for a missing shift).
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4


@dataclass(frozen=True)
class ErrorResponse:
    """Structured error payload for callers."""

    error_code: str
    message: str
    error_id: str

    def to_dict(self) -> dict:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "error_id": self.error_id,
        }


class StaffingError(Exception):
    """Base exception for the scheduling core."""

    error_code: str = "STAFFING_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error_code=self.error_code, message=self.message, error_id=self.error_id
        )


class DatabaseError(StaffingError):
    """Postgres connection or query error."""

    error_code: str = "DATABASE_ERROR"


class StorageError(StaffingError):
    """File backend I/O error."""

    error_code: str = "STORAGE_ERROR"


class LockTimeoutError(StorageError):
    """Lock file could not be acquired within the retry budget."""

    error_code: str = "LOCK_TIMEOUT"


class CorruptDataError(StorageError):
    """Persisted resource file is not a JSON array."""

    error_code: str = "CORRUPT_DATA"


class UnsafeFieldNameError(StaffingError):
    """Dynamic field name rejected before building a query."""

    error_code: str = "UNSAFE_FIELD_NAME"


class ValidationError(StaffingError):
    """Input cannot be completed into a valid record."""

    error_code: str = "VALIDATION_ERROR"


class NotFoundError(StaffingError):
    """A domain operation referenced a record that does not exist."""

    error_code: str = "NOT_FOUND"


class ShiftNotFoundError(NotFoundError):
    error_code: str = "SHIFT_NOT_FOUND"


class UnknownResourceError(NotFoundError):
    error_code: str = "UNKNOWN_RESOURCE"


class UnauthenticatedError(StaffingError):
    error_code: str = "UNAUTHENTICATED"


class ForbiddenError(StaffingError):
    """Caller's role is not allowed to perform the operation."""

    error_code: str = "FORBIDDEN"
