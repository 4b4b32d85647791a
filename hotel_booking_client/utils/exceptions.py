"""
Exception hierarchy for the hotel booking client.

Every error raised by the API client layer derives from HotelBookingError so
state containers can convert failures into boolean or None results.
"""

from typing import Any


class HotelBookingError(Exception):
    """Base exception for all hotel booking client errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ConfigurationError(HotelBookingError):
    """Raised when required configuration is missing or invalid."""


class ValidationError(HotelBookingError):
    """Raised for invalid input, locally or as reported by the backend."""


class AuthenticationError(HotelBookingError):
    """Raised when the backend rejects credentials or tokens."""


class ResourceNotFoundError(HotelBookingError):
    """Raised when the requested resource does not exist."""


class DataError(HotelBookingError):
    """Raised when a response body cannot be processed."""


class TimeoutError(HotelBookingError):
    """Raised when a request or upstream gateway times out."""


class APIError(HotelBookingError):
    """Raised for transport failures and unexpected HTTP error responses."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, details=details)
        self.response_data = response_data


class RateLimitError(HotelBookingError):
    """Raised when the backend rate limits the client."""

    def __init__(
        self,
        message: str,
        retry_after: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, status_code=429, details=details)
        self.retry_after = retry_after
