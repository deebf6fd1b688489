"""Typed failures reported by the back-office domain layer."""

from __future__ import annotations

from typing import Any


class BackofficeError(Exception):
    """Base failure carrying a user-facing message and a machine-readable code."""

    error_code = "BACKOFFICE_ERROR"

    def __init__(self, message: str, error_code: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidCredentials(BackofficeError):
    """No account matched the supplied email and password."""

    error_code = "INVALID_CREDENTIALS"


class Forbidden(BackofficeError):
    """The current role may not perform the requested action."""

    error_code = "FORBIDDEN"


class ValidationError(BackofficeError):
    """Input was rejected before anything was stored."""

    error_code = "VALIDATION_ERROR"


class NotFound(BackofficeError):
    """The referenced id is absent from the collection."""

    error_code = "NOT_FOUND"


class InvalidTransition(BackofficeError):
    """The order cannot move further along its status line."""

    error_code = "INVALID_TRANSITION"
