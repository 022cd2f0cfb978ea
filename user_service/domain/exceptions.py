"""
Classified errors for the user service.

Storage implementations raise these instead of bare exceptions so the API
layer can switch on ``kind`` rather than on message text. Every error carries
a human readable ``message`` that is safe to show to clients, except
``StorageError`` whose cause is only logged.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Machine-checkable classification of a failure"""
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID = "invalid"
    INTERNAL = "internal"


# -----------------------------------------------------------------------------
# Base
# -----------------------------------------------------------------------------


class UserServiceError(Exception):
    """Base exception for all user service errors."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# -----------------------------------------------------------------------------
# Client errors
# -----------------------------------------------------------------------------


class UserNotFoundError(UserServiceError):
    """Raised when no stored user has the requested ID."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User with ID {user_id} not found")
        self.user_id = user_id


class DuplicateEmailError(UserServiceError):
    """Raised when a write would give two users the same email."""

    kind = ErrorKind.CONFLICT

    def __init__(self, email: str) -> None:
        super().__init__(f"Email '{email}' is already in use")
        self.email = email


class InvalidUserInputError(UserServiceError):
    """Raised when request data fails decoding or presence checks."""

    kind = ErrorKind.INVALID


# -----------------------------------------------------------------------------
# Server errors
# -----------------------------------------------------------------------------


class StorageError(UserServiceError):
    """Raised for any storage failure that is not classified above."""

    kind = ErrorKind.INTERNAL

    def __init__(self, operation: str, cause: Optional[BaseException] = None) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"storage.{operation} failed{detail}")
        self.operation = operation
        self.cause = cause


class ConfigurationError(UserServiceError):
    """Raised at startup when required settings are missing or invalid."""

    kind = ErrorKind.INTERNAL
