"""Custom exceptions for alert definition operations."""

from __future__ import annotations


class AlertDefsError(Exception):
    """Base exception for alert definition errors."""


class InputValidationError(AlertDefsError):
    """Bad operator input, detected before any network call."""

    def __init__(self, message: str, *, example: str | None = None) -> None:
        self.message = message
        self.example = example
        super().__init__(message)


class AlertServiceConnectionError(AlertDefsError):
    """Transport-level failure (DNS, connection refused, connect timeout)."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Could not reach {url}: {reason}")


class AlertAPIError(AlertDefsError):
    """Well-formed response that reports an application-level failure."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        if status_code is None:
            super().__init__(message)
        else:
            super().__init__(f"API Error {status_code}: {message}")


class UserAbortError(AlertDefsError):
    """Operator declined a confirmation prompt."""

    def __init__(self, message: str = "Aborted by user") -> None:
        super().__init__(message)
