"""
Unit tests for the AuthApi and HotelApi facades.

The underlying BookingAPIClient is mocked; these tests check endpoint
paths, parameter shaping and the refresh policy of credential exchanges.
"""

from datetime import date
from unittest.mock import AsyncMock, Mock

import pytest

from hotel_booking_client.clients.auth_api import AuthApi
from hotel_booking_client.clients.base_client import APIResponse, BookingAPIClient
from hotel_booking_client.clients.hotel_api import HotelApi
from hotel_booking_client.models.booking import BookHotelRequest, GuestInfo
from hotel_booking_client.models.search import Coordinates, SearchFilters
from hotel_booking_client.utils.exceptions import AuthenticationError, ValidationError


@pytest.fixture
def mock_client() -> Mock:
    client = Mock(spec=BookingAPIClient)
    ok = APIResponse(success=True, data={})
    client.get = AsyncMock(return_value=ok)
    client.post = AsyncMock(return_value=ok)
    client.patch = AsyncMock(return_value=ok)
    client.refresh_token = AsyncMock(return_value=ok)
    return client


class TestAuthApi:
    """Test suite for AuthApi."""

    @pytest.mark.asyncio
    async def test_login_disables_refresh(self, mock_client):
        await AuthApi(mock_client).login("jane@example.com", "secret")

        mock_client.post.assert_awaited_once_with(
            "/auth/login",
            json_data={"email": "jane@example.com", "password": "secret"},
            allow_refresh=False,
        )

    @pytest.mark.asyncio
    async def test_register_sends_camel_case(self, mock_client):
        await AuthApi(mock_client).register(
            {
                "email": "jane@example.com",
                "password": "secret",
                "firstName": "Jane",
                "lastName": "Doe",
            }
        )

        mock_client.post.assert_awaited_once_with(
            "/auth/register",
            json_data={
                "email": "jane@example.com",
                "password": "secret",
                "firstName": "Jane",
                "lastName": "Doe",
            },
            allow_refresh=False,
        )

    @pytest.mark.asyncio
    async def test_get_profile_returns_user(self, mock_client, user_data):
        mock_client.get.return_value = APIResponse(success=True, data=user_data)

        user = await AuthApi(mock_client).get_profile()

        assert user is not None
        assert user.full_name == "Jane Doe"
        mock_client.get.assert_awaited_once_with("/auth/profile")

    @pytest.mark.asyncio
    async def test_get_profile_returns_none_on_error(self, mock_client):
        mock_client.get.side_effect = AuthenticationError("expired", status_code=401)

        assert await AuthApi(mock_client).get_profile() is None

    @pytest.mark.asyncio
    async def test_get_profile_returns_none_on_failed_envelope(self, mock_client):
        mock_client.get.return_value = APIResponse(success=False)

        assert await AuthApi(mock_client).get_profile() is None

    @pytest.mark.asyncio
    async def test_get_profile_returns_none_on_malformed_user(self, mock_client):
        mock_client.get.return_value = APIResponse(success=True, data={"id": "user-1"})

        assert await AuthApi(mock_client).get_profile() is None

    @pytest.mark.asyncio
    async def test_change_password(self, mock_client):
        await AuthApi(mock_client).change_password("old", "new")

        mock_client.post.assert_awaited_once_with(
            "/auth/change-password",
            json_data={"currentPassword": "old", "newPassword": "new"},
        )


class TestHotelApi:
    """Test suite for HotelApi."""

    @pytest.mark.asyncio
    async def test_search_hotels_flattens_filters(self, mock_client):
        filters = SearchFilters(
            location="Paris",
            check_in_date=date(2025, 6, 1),
            check_out_date=date(2025, 6, 3),
            price_range=(50, 300),
            star_rating=[4, 5],
            property_type=["HOTEL", "RESORT"],
            amenities=["wifi", "pool"],
            coordinates=Coordinates(lat=48.85, lng=2.35, radius=5),
            free_cancellation=True,
            pet_friendly=False,
        )

        await HotelApi(mock_client).search_hotels(
            query="romantic", filters=filters, sort_by="PRICE_LOW_TO_HIGH", page=2
        )

        mock_client.get.assert_awaited_once()
        endpoint = mock_client.get.call_args.args[0]
        params = mock_client.get.call_args.kwargs["params"]
        assert endpoint == "/hotels/search"
        assert params == {
            "location": "Paris",
            "checkInDate": "2025-06-01",
            "checkOutDate": "2025-06-03",
            "guests": 2,
            "rooms": 1,
            "minPrice": 50,
            "maxPrice": 300,
            "starRating": "4,5",
            "propertyType": "HOTEL,RESORT",
            "amenities": "wifi,pool",
            "lat": 48.85,
            "lng": 2.35,
            "radius": 5,
            "freeCancellation": "true",
            "petFriendly": "false",
            "query": "romantic",
            "sortBy": "PRICE_LOW_TO_HIGH",
            "page": 2,
            "limit": 20,
        }

    @pytest.mark.asyncio
    async def test_search_hotels_rejects_large_page_size(self, mock_client):
        with pytest.raises(ValidationError):
            await HotelApi(mock_client).search_hotels(limit=500)
        mock_client.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_hotel_by_id_or_slug(self, mock_client):
        api = HotelApi(mock_client)

        await api.get_hotel(hotel_id="h1")
        await api.get_hotel(slug="grand-plaza")

        assert [c.args[0] for c in mock_client.get.call_args_list] == [
            "/hotels/h1",
            "/hotels/slug/grand-plaza",
        ]

    @pytest.mark.asyncio
    async def test_get_hotel_requires_identifier(self, mock_client):
        with pytest.raises(ValidationError):
            await HotelApi(mock_client).get_hotel()

    @pytest.mark.asyncio
    async def test_book_hotel_posts_booking_request(self, mock_client):
        request = BookHotelRequest(
            hotel_id="h1",
            room_id="r1",
            check_in_date="2025-06-01",
            check_out_date="2025-06-03",
            guests=2,
            rooms=1,
            guest_info=GuestInfo(
                first_name="Jane",
                last_name="Doe",
                email="jane@example.com",
                phone="+1-555-0100",
            ),
            payment_method="CREDIT_CARD",
        )

        await HotelApi(mock_client).book_hotel(request)

        mock_client.post.assert_awaited_once_with(
            "/hotels/book",
            json_data={
                "hotelId": "h1",
                "roomId": "r1",
                "checkInDate": "2025-06-01",
                "checkOutDate": "2025-06-03",
                "guests": 2,
                "rooms": 1,
                "guestInfo": {
                    "firstName": "Jane",
                    "lastName": "Doe",
                    "email": "jane@example.com",
                    "phone": "+1-555-0100",
                },
                "paymentMethod": "CREDIT_CARD",
            },
        )

    @pytest.mark.asyncio
    async def test_real_time_availability_endpoint(self, mock_client):
        api = HotelApi(mock_client)

        await api.get_real_time_availability("h1")
        await api.get_real_time_availability("h1", room_id="r1")

        assert [c.args[0] for c in mock_client.get.call_args_list] == [
            "/hotels/h1/realtime-availability",
            "/hotels/h1/rooms/r1/realtime-availability",
        ]

    @pytest.mark.asyncio
    async def test_cancel_booking(self, mock_client):
        await HotelApi(mock_client).cancel_booking("b1", reason="Change of plans")

        mock_client.post.assert_awaited_once_with(
            "/bookings/b1/cancel", json_data={"reason": "Change of plans"}
        )
