"""
Base API client for the hotel booking backend.

Provides common functionality including bearer authentication, a single
token refresh on 401, error notification, and request/response processing
for all API facades.
"""

import asyncio
import json
import logging
import time
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import BaseModel

from hotel_booking_client.config.settings import Settings
from hotel_booking_client.storage import (
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    KeyValueStore,
)
from hotel_booking_client.utils.exceptions import (
    APIError,
    AuthenticationError,
    DataError,
    HotelBookingError,
    RateLimitError,
    ResourceNotFoundError,
    TimeoutError,
    ValidationError,
)
from hotel_booking_client.utils.navigation import LOGIN_PATH, Navigator
from hotel_booking_client.utils.notifications import Notifier

logger = logging.getLogger(__name__)

REFRESH_ENDPOINT = "/auth/refresh"

SERVER_ERROR_MESSAGE = "Server error. Please try again later."
CLIENT_ERROR_MESSAGE = "An error occurred"
TIMEOUT_MESSAGE = "Request timeout. Please check your connection."
NETWORK_ERROR_MESSAGE = "Network error. Please check your connection."


class APIResponse(BaseModel):
    """Standard API response model mirroring the backend envelope."""

    success: bool
    data: Any = None
    message: str | None = None
    error: str | None = None
    status_code: int | None = None
    headers: dict[str, str] | None = None


class DataTransformer:
    """Utility class for request data sanitization and log masking."""

    @staticmethod
    def sanitize_request_data(data: dict[str, Any]) -> dict[str, Any]:
        """Sanitize request data by removing None values and empty strings."""
        if not isinstance(data, dict):
            return data

        cleaned = {}
        for key, value in data.items():
            if value is None or value == "":
                continue
            elif isinstance(value, dict):
                cleaned_nested = DataTransformer.sanitize_request_data(value)
                if cleaned_nested:
                    cleaned[key] = cleaned_nested
            elif isinstance(value, list):
                cleaned[key] = [
                    DataTransformer.sanitize_request_data(item)
                    if isinstance(item, dict)
                    else item
                    for item in value
                    if item is not None
                ]
            else:
                cleaned[key] = value

        return cleaned

    @staticmethod
    def mask_sensitive_data(
        data: dict[str, Any] | None, sensitive_fields: set | None = None
    ) -> dict[str, Any]:
        """Mask sensitive data in logs."""
        if sensitive_fields is None:
            sensitive_fields = {
                "password",
                "secret",
                "token",
                "authorization",
                "code",
                "phone",
                "email",
            }

        def _mask_recursive(obj: Any) -> Any:
            if isinstance(obj, dict):
                masked = {}
                for key, value in obj.items():
                    key_lower = str(key).lower()
                    if any(
                        sensitive_field in key_lower
                        for sensitive_field in sensitive_fields
                    ):
                        masked[key] = "***MASKED***"
                    else:
                        masked[key] = _mask_recursive(value)
                return masked
            elif isinstance(obj, list):
                return [_mask_recursive(item) for item in obj]
            else:
                return obj

        return _mask_recursive(data or {})


def handle_api_response(response: APIResponse) -> Any:
    """
    Unwrap the envelope data.

    Raises:
        APIError: If the backend reported failure with an error message
    """
    if not response.success and response.error:
        raise APIError(response.error, status_code=response.status_code)
    return response.data


class BookingAPIClient:
    """
    HTTP client shared by every backend API facade.

    Features:
    - Bearer token injection from the local store
    - One refresh-and-retry per request on 401
    - Typed exceptions plus a user notification for every failure
    - Request/response logging with sensitive fields masked
    - Fixed request timeout and async context management
    """

    def __init__(
        self,
        storage: KeyValueStore,
        notifier: Notifier | None = None,
        settings: Settings | None = None,
        navigator: Navigator | None = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            storage: Key-value store holding the access and refresh tokens
            notifier: Destination for user-facing error messages
            settings: Optional settings instance
            navigator: Navigation target used when the session expires
        """
        self.storage = storage
        self.notifier = notifier or Notifier()
        self.settings = settings or Settings()
        self.navigator = navigator or Navigator()
        self._session: httpx.AsyncClient | None = None
        self._session_lock = asyncio.Lock()
        self._session_expired_listeners: list[Callable[[], None]] = []

        self._data_transformer = DataTransformer()

        self._connection_limits = httpx.Limits(
            max_connections=20,
            max_keepalive_connections=10,
            keepalive_expiry=30.0,
        )
        self._timeout_config = httpx.Timeout(float(self.settings.request_timeout))

    async def __aenter__(self) -> "BookingAPIClient":
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> None:
        """Ensure HTTP session is initialized with proper configuration."""
        if self._session is None:
            async with self._session_lock:
                if self._session is None:  # Double-check pattern
                    self._session = httpx.AsyncClient(
                        timeout=self._timeout_config,
                        limits=self._connection_limits,
                        http2=True,
                        follow_redirects=True,
                        headers={"User-Agent": "hotel-booking-client/0.1 (httpx)"},
                    )
                    logger.debug(
                        "HTTP session initialized",
                        extra={
                            "timeout": self.settings.request_timeout,
                            "max_connections": self._connection_limits.max_connections,
                        },
                    )

    async def close(self) -> None:
        """Close HTTP session and cleanup resources."""
        if self._session:
            try:
                await self._session.aclose()
                logger.debug("HTTP session closed successfully")
            except Exception as e:
                logger.warning(f"Error closing HTTP session: {e}")
            finally:
                self._session = None

    @property
    def base_url(self) -> str:
        """Get base API URL."""
        return self.settings.api_base_url.rstrip("/")

    def build_url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def add_session_expired_listener(self, listener: Callable[[], None]) -> None:
        """Register a callback run after a failed token refresh drops the session."""
        self._session_expired_listeners.append(listener)

    def get_client_status(self) -> dict[str, Any]:
        """Get a summary of the client state."""
        return {
            "client_initialized": self._session is not None,
            "base_url": self.base_url,
            "timeout": self.settings.request_timeout,
            "has_access_token": self.storage.get(ACCESS_TOKEN_KEY) is not None,
            "has_refresh_token": self.storage.get(REFRESH_TOKEN_KEY) is not None,
        }

    async def _log_request(self, method: str, url: str, **kwargs) -> None:
        """Log outgoing request details."""
        request_size = 0
        if kwargs.get("json"):
            request_size = len(json.dumps(kwargs["json"]).encode("utf-8"))

        logger.info(
            f"API Request: {method} {url}",
            extra={
                "method": method,
                "url": url,
                "request_size_bytes": request_size,
                "params": self._data_transformer.mask_sensitive_data(
                    kwargs.get("params")
                ),
                "json_data": self._data_transformer.mask_sensitive_data(
                    kwargs.get("json")
                ),
            },
        )

    async def _log_response(
        self,
        method: str,
        url: str,
        response: httpx.Response,
        duration_ms: float,
    ) -> None:
        """Log response details."""
        log_data = {
            "method": method,
            "url": url,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
            "response_size_bytes": len(response.content) if response.content else 0,
        }

        if response.status_code >= 400:
            logger.warning(
                f"API Error Response: {method} {url} - {response.status_code}",
                extra=log_data,
            )
        else:
            logger.info(
                f"API Response: {method} {url} - {response.status_code}", extra=log_data
            )

    async def request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
        allow_refresh: bool = True,
    ) -> APIResponse:
        """
        Make an authenticated API request.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            endpoint: API endpoint (without base URL)
            params: Query parameters
            json_data: JSON request body
            headers: Additional headers
            timeout: Custom timeout for this request
            allow_refresh: Refresh the access token and retry once on 401

        Returns:
            APIResponse parsed from the response envelope

        Raises:
            HotelBookingError: For transport failures and error responses,
                after the user has been notified
        """
        await self._ensure_session()

        url = self.build_url(endpoint)

        if json_data:
            json_data = self._data_transformer.sanitize_request_data(json_data)

        request_headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if headers:
            request_headers.update(headers)

        await self._log_request(method, url, params=params, json=json_data)

        retried = False
        while True:
            response = await self._send(
                method, url, params, json_data, request_headers, timeout
            )
            if response.status_code == 401 and allow_refresh and not retried:
                retried = True
                if await self._refresh_access_token():
                    logger.info(
                        f"Access token refreshed, retrying {method} {url}",
                        extra={"method": method, "url": url},
                    )
                    continue
            break

        try:
            return await self._handle_response(response)
        except HotelBookingError as e:
            self._notify_failure(e)
            raise

    async def _send(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None,
        json_data: dict[str, Any] | None,
        headers: dict[str, str],
        timeout: float | None,
    ) -> httpx.Response:
        """Send one HTTP request with the current access token attached."""
        send_headers = dict(headers)
        token = self.storage.get(ACCESS_TOKEN_KEY)
        if token:
            send_headers["Authorization"] = f"Bearer {token}"

        request_timeout = timeout or self.settings.request_timeout

        request_start = time.time()
        try:
            response = await self._session.request(
                method=method,
                url=url,
                params=params,
                json=json_data,
                headers=send_headers,
                timeout=request_timeout,
            )
        except httpx.TimeoutException as e:
            error = TimeoutError(
                f"Request timed out after {request_timeout}s: {method} {url}",
                details={"method": method, "url": url},
            )
            logger.warning(str(error), extra={"timeout": request_timeout})
            self._notify_failure(error)
            raise error from e
        except httpx.RequestError as e:
            error = APIError(
                f"Request failed: {method} {url}: {e}",
                details={"method": method, "url": url, "error_type": type(e).__name__},
            )
            logger.warning(str(error))
            self._notify_failure(error)
            raise error from e

        duration_ms = (time.time() - request_start) * 1000
        await self._log_response(method, url, response, duration_ms)
        return response

    async def _refresh_access_token(self) -> bool:
        """
        Exchange the stored refresh token for a new access token.

        Returns:
            True when a new access token was stored. On failure both tokens are
            removed and the user is sent to the login page.
        """
        refresh_token = self.storage.get(REFRESH_TOKEN_KEY)
        if not refresh_token:
            return False

        new_token = None
        try:
            response = await self._send(
                "POST",
                self.build_url(REFRESH_ENDPOINT),
                None,
                {"refreshToken": refresh_token},
                {"Content-Type": "application/json", "Accept": "application/json"},
                None,
            )
            refreshed = await self._handle_response(response)
            if refreshed.success and isinstance(refreshed.data, dict):
                new_token = refreshed.data.get("accessToken")
        except HotelBookingError as e:
            logger.warning(f"Token refresh failed: {e}")

        if not new_token:
            self._expire_session()
            return False

        self.storage.set(ACCESS_TOKEN_KEY, new_token)
        return True

    def _expire_session(self) -> None:
        """Drop stored tokens and send the user to the login page."""
        self.storage.remove(ACCESS_TOKEN_KEY)
        self.storage.remove(REFRESH_TOKEN_KEY)
        logger.info("Session expired, redirecting to login")
        self.navigator.push(LOGIN_PATH)
        for listener in self._session_expired_listeners:
            listener()

    def _notify_failure(self, error: HotelBookingError) -> None:
        """Surface a request failure to the user."""
        status_code = error.status_code
        if status_code is not None and status_code >= 500:
            self.notifier.error(SERVER_ERROR_MESSAGE)
        elif status_code is not None and status_code >= 400:
            self.notifier.error(
                error.details.get("server_message") or CLIENT_ERROR_MESSAGE
            )
        elif isinstance(error, TimeoutError):
            self.notifier.error(TIMEOUT_MESSAGE)
        else:
            self.notifier.error(NETWORK_ERROR_MESSAGE)

    async def _handle_response(self, response: httpx.Response) -> APIResponse:
        """
        Handle API response and convert to standard format.

        Args:
            response: HTTP response object

        Returns:
            APIResponse built from the response envelope

        Raises:
            Various HotelBookingError subclasses based on response
        """
        status_code = response.status_code

        # Success responses
        if 200 <= status_code < 300:
            try:
                payload = response.json() if response.content else {}
            except json.JSONDecodeError as e:
                logger.error(f"Failed to parse successful response JSON: {e}")
                return APIResponse(
                    success=True,
                    data={
                        "raw_content": response.text,
                        "content_type": response.headers.get("content-type"),
                    },
                    status_code=status_code,
                )

            try:
                if isinstance(payload, dict) and "success" in payload:
                    return APIResponse(
                        success=bool(payload["success"]),
                        data=payload.get("data"),
                        message=payload.get("message"),
                        error=payload.get("error"),
                        status_code=status_code,
                        headers=dict(response.headers),
                    )
                return APIResponse(
                    success=True,
                    data=payload,
                    status_code=status_code,
                    headers=dict(response.headers),
                )
            except Exception as e:
                logger.error(f"Unexpected error processing successful response: {e}")
                raise DataError(f"Failed to process response data: {e}") from e

        # Error responses
        error_msg = f"HTTP {status_code}"
        error_data = None
        server_message = None
        retry_after = None

        try:
            if response.content:
                error_data = response.json()
                if isinstance(error_data, dict):
                    server_message = error_data.get("message")
                    error_msg = (
                        server_message
                        or error_data.get("error")
                        or error_data.get("detail")
                        or error_msg
                    )
        except json.JSONDecodeError:
            error_msg = response.text[:500] or error_msg

        if status_code == 429:
            header_value = response.headers.get("Retry-After")
            if header_value:
                try:
                    retry_after = int(header_value)
                except ValueError:
                    retry_after = None

        error_details = {
            "status_code": status_code,
            "url": str(response.url),
            "method": response.request.method if response.request else "Unknown",
        }
        if error_data:
            error_details["response_data"] = error_data
        if server_message:
            error_details["server_message"] = server_message

        if status_code == 401:
            raise AuthenticationError(
                f"Authentication failed: {error_msg}",
                status_code=status_code,
                details=error_details,
            )
        elif status_code == 403:
            raise AuthenticationError(
                f"Access forbidden: {error_msg}",
                status_code=status_code,
                details=error_details,
            )
        elif status_code == 404:
            raise ResourceNotFoundError(
                f"Resource not found: {error_msg}",
                status_code=status_code,
                details=error_details,
            )
        elif status_code in (400, 409, 422):
            raise ValidationError(
                f"Validation error: {error_msg}",
                status_code=status_code,
                details=error_details,
            )
        elif status_code == 429:
            raise RateLimitError(
                f"Rate limit exceeded: {error_msg}",
                retry_after=retry_after,
                details=error_details,
            )
        elif status_code == 504:
            raise TimeoutError(
                f"Gateway timeout: {error_msg}",
                status_code=status_code,
                details=error_details,
            )
        elif 400 <= status_code < 500:
            raise APIError(
                f"Client error {status_code}: {error_msg}",
                status_code=status_code,
                response_data=error_data,
                details=error_details,
            )
        elif status_code >= 500:
            raise APIError(
                f"Server error {status_code}: {error_msg}",
                status_code=status_code,
                response_data=error_data,
                details=error_details,
            )

        raise APIError(
            f"Unexpected response {status_code}: {error_msg}",
            status_code=status_code,
            response_data=error_data,
            details=error_details,
        )

    async def get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> APIResponse:
        """Make GET request."""
        return await self.request(
            "GET", endpoint, params=params, headers=headers, timeout=timeout
        )

    async def post(
        self,
        endpoint: str,
        json_data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
        allow_refresh: bool = True,
    ) -> APIResponse:
        """Make POST request."""
        return await self.request(
            "POST",
            endpoint,
            params=params,
            json_data=json_data,
            headers=headers,
            timeout=timeout,
            allow_refresh=allow_refresh,
        )

    async def put(
        self,
        endpoint: str,
        json_data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> APIResponse:
        """Make PUT request."""
        return await self.request(
            "PUT",
            endpoint,
            params=params,
            json_data=json_data,
            headers=headers,
            timeout=timeout,
        )

    async def patch(
        self,
        endpoint: str,
        json_data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> APIResponse:
        """Make PATCH request."""
        return await self.request(
            "PATCH",
            endpoint,
            params=params,
            json_data=json_data,
            headers=headers,
            timeout=timeout,
        )

    async def delete(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> APIResponse:
        """Make DELETE request."""
        return await self.request(
            "DELETE", endpoint, params=params, headers=headers, timeout=timeout
        )

    async def refresh_token(self, refresh_token: str) -> APIResponse:
        """Exchange a refresh token for a new access token."""
        return await self.post(
            REFRESH_ENDPOINT,
            json_data={"refreshToken": refresh_token},
            allow_refresh=False,
        )

    async def health_check(self) -> APIResponse:
        """Ping the backend health endpoint."""
        return await self.get("/health")
