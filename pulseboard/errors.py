"""Exception hierarchy shared by the Pulseboard services.

The reducer and the analytics aggregator never raise; the exceptions below are
reserved for caller-side validation and for the boundaries with external
collaborators (news provider, storage backends).
"""

from __future__ import annotations

from enum import Enum


class ErrorType(str, Enum):
    """Categories of errors surfaced to the presentation layer."""

    VALIDATION_ERROR = "validation_error"
    AUTHENTICATION_ERROR = "authentication_error"
    NETWORK_ERROR = "network_error"
    STORAGE_ERROR = "storage_error"


class PulseboardError(Exception):
    """Base class for every error raised by Pulseboard."""

    error_type: ErrorType = ErrorType.VALIDATION_ERROR


class ValidationFailedError(PulseboardError):
    """Raised when user input is rejected before an action is dispatched."""

    error_type = ErrorType.VALIDATION_ERROR

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        summary = "; ".join(f"{field}: {message}" for field, message in self.errors.items())
        super().__init__(summary or "Validation failed")


class AuthenticationRequiredError(PulseboardError):
    """Raised when an operation needs a signed-in user and none is present."""

    error_type = ErrorType.AUTHENTICATION_ERROR


class NewsFetchError(PulseboardError):
    """Raised when the news provider cannot be reached or returns an error."""

    error_type = ErrorType.NETWORK_ERROR


class StorageError(PulseboardError):
    """Raised when a storage backend fails for reasons other than corrupt data."""

    error_type = ErrorType.STORAGE_ERROR


__all__ = [
    "AuthenticationRequiredError",
    "ErrorType",
    "NewsFetchError",
    "PulseboardError",
    "StorageError",
    "ValidationFailedError",
]
