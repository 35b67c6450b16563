"""Error models for Sendly SDK.

Every failure the SDK surfaces is one member of a closed taxonomy. The
``kind`` attribute of each error names its member of :class:`ErrorKind`,
which is what the request executor dispatches on when deciding whether to
retry. Errors are value objects: their fields are fixed at construction.
"""
from __future__ import annotations

import math
from enum import Enum
from typing import Any, ClassVar, Optional


class ErrorKind(str, Enum):
    """Closed set of error kinds raised by the SDK."""

    AUTHENTICATION = "AUTHENTICATION_ERROR"
    INSUFFICIENT_CREDITS = "INSUFFICIENT_CREDITS"
    VALIDATION = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMIT = "RATE_LIMIT_EXCEEDED"
    SERVER = "SERVER_ERROR"
    NETWORK = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT_ERROR"
    GENERIC = "API_ERROR"
    WEBHOOK_SIGNATURE = "WEBHOOK_SIGNATURE_ERROR"


class SendlyError(Exception):
    """Base exception for Sendly SDK."""

    kind: ClassVar[ErrorKind] = ErrorKind.GENERIC
    default_message: ClassVar[str] = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ):
        if message is None:
            message = self.default_message
        super().__init__(message)
        self.message = message
        self.code = code or self.kind.value
        self.status_code = status_code
        self.details = details
        self._sealed = True

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_sealed", False) and not name.startswith("__"):
            raise AttributeError(f"{type(self).__name__} is immutable")
        super().__setattr__(name, value)

    def __reduce__(self) -> tuple:
        return (_restore_error, (type(self), self.args, dict(self.__dict__)))

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    @property
    def retryable(self) -> bool:
        """Whether the executor may retry a request that failed this way."""
        return self.kind in (ErrorKind.RATE_LIMIT, ErrorKind.SERVER)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "status_code": self.status_code,
                "details": self.details,
            }
        }


class AuthenticationError(SendlyError):
    """The API key is invalid, malformed or missing."""

    kind = ErrorKind.AUTHENTICATION
    default_message = "Invalid or missing API key"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, status_code=401)


class InsufficientCreditsError(SendlyError):
    """The account has no credits left for the request."""

    kind = ErrorKind.INSUFFICIENT_CREDITS
    default_message = "Insufficient credits"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, status_code=402)


class ValidationError(SendlyError):
    """The request contains invalid parameters."""

    kind = ErrorKind.VALIDATION
    default_message = "Validation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Any] = None,
        status_code: int = 400,
    ):
        super().__init__(message, status_code=status_code, details=details)


class NotFoundError(SendlyError):
    """The requested resource does not exist."""

    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, status_code=404)


class RateLimitError(SendlyError):
    """Rate limit exceeded error.

    ``retry_after`` is the server-directed wait in seconds, possibly
    fractional, or ``None`` when the server did not say.
    """

    kind = ErrorKind.RATE_LIMIT
    default_message = "Rate limit exceeded"

    def __init__(self, message: Optional[str] = None, retry_after: Optional[float] = None):
        self.retry_after = retry_after
        super().__init__(message, status_code=429)


class ServerError(SendlyError):
    """The API failed with a 5xx status."""

    kind = ErrorKind.SERVER
    default_message = "Server error occurred"

    def __init__(self, message: Optional[str] = None, status_code: int = 500):
        super().__init__(message, status_code=status_code)


class NetworkError(SendlyError):
    """The request never produced an HTTP response."""

    kind = ErrorKind.NETWORK
    default_message = "Network error occurred"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message)


class TimeoutError(NetworkError):
    """The connect or read timeout elapsed."""

    kind = ErrorKind.TIMEOUT
    default_message = "Request timed out"


class APIError(SendlyError):
    """Error from an API response with no more specific kind."""

    kind = ErrorKind.GENERIC

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message, code=code, status_code=status_code, details=details)


class WebhookSignatureError(SendlyError):
    """A webhook payload failed verification or validation."""

    kind = ErrorKind.WEBHOOK_SIGNATURE
    default_message = "Invalid webhook signature"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message)


def _restore_error(cls: type, args: tuple, state: dict[str, Any]) -> SendlyError:
    """Rebuild a pickled error without going through the sealed ``__setattr__``."""
    error = cls.__new__(cls, *args)
    error.__dict__.update(state)
    return error


def _coerce_retry_after(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    try:
        seconds = float(value)
    except (ValueError, OverflowError):
        return None
    if not math.isfinite(seconds) or seconds < 0:
        return None
    return seconds


def _first_present(body: dict, *keys: str) -> Any:
    for key in keys:
        value = body.get(key)
        if value is not None and value is not False:
            return value
    return None


def classify(status: int, body: Any) -> SendlyError:
    """Map an HTTP status and parsed response body to an error.

    Args:
        status: HTTP status code of the response
        body: JSON value parsed from the response body; anything that is
            not an object is treated as an empty object

    Returns:
        The error matching the status
    """
    if not isinstance(body, dict):
        body = {}

    message = _first_present(body, "message", "error")
    if message is None:
        message = "Unknown error"
    if not isinstance(message, str):
        message = str(message)
    details = body.get("details")

    if status in (400, 422):
        return ValidationError(message, details=details, status_code=status)
    if status == 401:
        return AuthenticationError(message)
    if status == 402:
        return InsufficientCreditsError(message)
    if status == 404:
        return NotFoundError(message)
    if status == 429:
        retry_after = body.get("retry_after")
        if retry_after is None:
            retry_after = body.get("retryAfter")
        return RateLimitError(message, retry_after=_coerce_retry_after(retry_after))
    if 500 <= status <= 599:
        return ServerError(message, status_code=status)
    return APIError(message, status_code=status, code=body.get("code"), details=details)
