"""
Custom exceptions for the Investec Card SDK.
Provides meaningful error classes for client consumers.

Every failure raised by the SDK derives from CardAPIError, so callers can
catch the whole family at once or handle each case explicitly:

- ValidationError: missing or invalid arguments, raised before any I/O
- AuthError: identity endpoint failure or insufficient OAuth scope
- NotFoundError: the remote resource does not exist (HTTP 404)
- HttpError: any other non-200 response
- TransportError: network failure or request timeout
"""

from typing import Any, Optional


class CardAPIError(Exception):
    """
    Base exception for all SDK-level API failures.

    Args:
        message (str): Short explanation of the error.
        details (Any | None): Optional structured details (e.g., response body).
    """

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.details = details


class ValidationError(CardAPIError):
    """Raised when required caller-supplied arguments are missing or invalid."""


class AuthError(CardAPIError):
    """Custom exception for authentication errors."""


class NotFoundError(CardAPIError):
    """Raised when the API answers 404 for a card resource."""

    status_code = 404

    def __init__(self, message: str = "Card not found", details: Optional[Any] = None):
        super().__init__(message, details=details)


class HttpError(CardAPIError):
    """
    Raised for any non-200 response other than 404.

    The message is the response's status reason text.
    """

    def __init__(self, status_code: int, reason: str, details: Optional[Any] = None):
        super().__init__(reason, details=details)
        self.status_code = status_code
        self.reason = reason


class TransportError(CardAPIError):
    """Raised when the request never produced a response (network error or timeout)."""

    def __init__(
        self, message: str, is_timeout: bool = False, details: Optional[Any] = None
    ):
        super().__init__(message, details=details)
        self.is_timeout = is_timeout
