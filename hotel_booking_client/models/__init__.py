"""Data models for the hotel booking client."""

from hotel_booking_client.models.booking import (
    BookHotelRequest,
    Booking,
    BookingStatus,
    GuestInfo,
    PaymentMethod,
    PaymentStatus,
)
from hotel_booking_client.models.cart import Cart, CartItem
from hotel_booking_client.models.common import (
    ApiEnvelope,
    BookingBaseModel,
    Money,
    PaginationInfo,
)
from hotel_booking_client.models.hotel import (
    ApiSettings,
    Availability,
    Hotel,
    PropertyType,
    ProviderSetting,
    Room,
    RoomType,
)
from hotel_booking_client.models.search import (
    Coordinates,
    SearchFilters,
    SearchResults,
    SearchSortOption,
)
from hotel_booking_client.models.user import (
    AuthTokens,
    LoginResult,
    Permissions,
    RegisterRequest,
    User,
    UserPreference,
    UserRole,
)

__all__ = [
    "ApiEnvelope",
    "ApiSettings",
    "AuthTokens",
    "Availability",
    "BookHotelRequest",
    "Booking",
    "BookingBaseModel",
    "BookingStatus",
    "Cart",
    "CartItem",
    "Coordinates",
    "GuestInfo",
    "Hotel",
    "LoginResult",
    "Money",
    "PaginationInfo",
    "PaymentMethod",
    "PaymentStatus",
    "Permissions",
    "PropertyType",
    "ProviderSetting",
    "RegisterRequest",
    "Room",
    "RoomType",
    "SearchFilters",
    "SearchResults",
    "SearchSortOption",
    "User",
    "UserPreference",
    "UserRole",
]
