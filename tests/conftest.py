"""Shared fixtures for the hotel booking client tests."""

from collections.abc import Callable

import httpx
import pytest

from hotel_booking_client.clients.base_client import BookingAPIClient
from hotel_booking_client.config.settings import Settings
from hotel_booking_client.models.hotel import Hotel
from hotel_booking_client.storage import MemoryStore
from hotel_booking_client.utils.navigation import Navigator
from hotel_booking_client.utils.notifications import Notifier

BASE_URL = "https://api.test.com/api"


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at a fake backend."""
    return Settings(
        api_base_url=BASE_URL,
        request_timeout=5,
        max_retries=2,
        retry_backoff=0.0,
        tax_rate=0.10,
        token_refresh_interval=3600,
        _env_file=None,
    )


@pytest.fixture
def storage() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def notifier() -> Notifier:
    return Notifier()


@pytest.fixture
def navigator() -> Navigator:
    return Navigator()


@pytest.fixture
def make_client(
    storage: MemoryStore,
    notifier: Notifier,
    settings: Settings,
    navigator: Navigator,
) -> Callable[[Callable[[httpx.Request], httpx.Response]], BookingAPIClient]:
    """Build an API client whose HTTP traffic goes to a handler function."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> BookingAPIClient:
        client = BookingAPIClient(
            storage=storage,
            notifier=notifier,
            settings=settings,
            navigator=navigator,
        )
        client._session = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return client

    return _make


@pytest.fixture
def hotel_data() -> dict:
    """Hotel payload as returned by the backend."""
    return {
        "id": "hotel-1",
        "name": "Grand Plaza",
        "slug": "grand-plaza",
        "city": "Paris",
        "country": "France",
        "starRating": 4,
        "propertyType": "HOTEL",
        "rateHawkId": "rh-123",
        "rooms": [
            {
                "id": "room-1",
                "hotelId": "hotel-1",
                "name": "Deluxe King",
                "roomType": "DELUXE",
                "maxOccupancy": 2,
                "basePrice": 150,
                "serviceFee": 10,
                "currency": "USD",
            },
            {
                "id": "room-2",
                "hotelId": "hotel-1",
                "name": "Standard Twin",
                "basePrice": 90,
            },
        ],
    }


@pytest.fixture
def hotel(hotel_data: dict) -> Hotel:
    return Hotel.model_validate(hotel_data)


@pytest.fixture
def user_data() -> dict:
    return {
        "id": "user-1",
        "email": "jane@example.com",
        "firstName": "Jane",
        "lastName": "Doe",
        "role": "CUSTOMER",
        "isVerified": True,
        "preferences": {"language": "fr", "currency": "EUR"},
    }
