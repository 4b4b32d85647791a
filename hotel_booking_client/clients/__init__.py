"""HTTP clients for the booking backend."""

from hotel_booking_client.clients.auth_api import AuthApi
from hotel_booking_client.clients.base_client import (
    APIResponse,
    BookingAPIClient,
    handle_api_response,
)
from hotel_booking_client.clients.hotel_api import HotelApi
from hotel_booking_client.clients.retry import with_retry

__all__ = [
    "APIResponse",
    "AuthApi",
    "BookingAPIClient",
    "HotelApi",
    "handle_api_response",
    "with_retry",
]
