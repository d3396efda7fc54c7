"""
Custom exceptions for the starter backend.
These provide consistent error handling across the application.
"""

from enum import Enum
from typing import Optional


class StarterException(Exception):
    """Base exception for all starter backend exceptions."""

    pass


class ConfigurationError(StarterException):
    """Raised at start-up when a required configuration value is missing."""

    pass


class AuthenticationError(StarterException):
    """Custom exception for authentication errors"""

    def __init__(self, message, status_code=401):
        super().__init__(message)
        self.status_code = status_code


class UserErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    MULTIPLE_ROWS = "multiple_rows"
    CONFLICT = "conflict"
    CONSTRAINT = "constraint"
    TRANSPORT = "transport"
    UNKNOWN = "unknown"


class UserRecordError(StarterException):
    """
    Normalised error returned by the user record gateway.

    The gateway never raises this for remote failures; it hands it back as the
    error half of a result pair so callers can inspect ``kind``.
    """

    def __init__(
        self,
        kind: UserErrorKind,
        message: str,
        code: Optional[str] = None,
        details: Optional[str] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.code = code
        self.details = details

    def __repr__(self):
        return f"UserRecordError({self.kind.value}, {self.message!r}, code={self.code!r})"

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }
