"""Domain errors raised by the submission service and the admin auth guard."""

from __future__ import annotations

from typing import Sequence


class ServiceRequestError(Exception):
    """Base class for every error the HTTP layer knows how to shape."""

    message = "Internal server error."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(ServiceRequestError):
    message = "All fields are required."

    def __init__(self, missing: Sequence[str], message: str | None = None) -> None:
        super().__init__(message)
        self.missing = list(missing)


class InvalidCredentials(ServiceRequestError):
    message = "Invalid credentials"


class Unauthenticated(ServiceRequestError):
    """Token absent (401) or rejected by signature/expiry checks (403)."""

    message = "Authentication required"

    def __init__(self, message: str | None = None, status_code: int = 401) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFound(ServiceRequestError):
    message = "Submission not found."


class StoreUnavailable(ServiceRequestError):
    message = "Internal server error during database operation."


class NotifyError(ServiceRequestError):
    message = "Failed to send notification email."

    def __init__(self, diagnostic: str) -> None:
        super().__init__(diagnostic)
        self.diagnostic = diagnostic


__all__ = [
    "ServiceRequestError",
    "ValidationError",
    "InvalidCredentials",
    "Unauthenticated",
    "NotFound",
    "StoreUnavailable",
    "NotifyError",
]
