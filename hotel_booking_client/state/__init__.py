"""Client-side state containers."""

from hotel_booking_client.state.auth import AuthState
from hotel_booking_client.state.cart import CartState
from hotel_booking_client.state.preferences import PreferencesState
from hotel_booking_client.state.recent_searches import (
    POPULAR_DESTINATIONS,
    RecentSearches,
)
from hotel_booking_client.state.search import SearchState

__all__ = [
    "POPULAR_DESTINATIONS",
    "AuthState",
    "CartState",
    "PreferencesState",
    "RecentSearches",
    "SearchState",
]
