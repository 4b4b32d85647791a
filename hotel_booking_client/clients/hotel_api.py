"""
Hotel, availability and booking endpoints.

Search and booking requests are forwarded to the backend, which fans out to
the external inventory providers; this client only shapes the requests.
"""

import logging
from typing import Any

from hotel_booking_client.clients.base_client import APIResponse, BookingAPIClient
from hotel_booking_client.models.booking import BookHotelRequest
from hotel_booking_client.models.search import SearchFilters, SearchSortOption
from hotel_booking_client.utils.exceptions import ValidationError
from hotel_booking_client.utils.validators import validate_pagination_params

logger = logging.getLogger(__name__)


class HotelApi:
    """Client for the /hotels, /destinations and /bookings endpoints."""

    def __init__(self, client: BookingAPIClient) -> None:
        self.client = client

    async def search_hotels(
        self,
        query: str | None = None,
        filters: SearchFilters | None = None,
        sort_by: SearchSortOption | str | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> APIResponse:
        """
        Search hotels across all inventory providers.

        Args:
            query: Free-text query
            filters: Filter set; defaults apply when omitted
            sort_by: Result ordering
            page: 1-based page number
            limit: Page size (1-100)

        Returns:
            APIResponse whose data is a SearchResults payload
        """
        validate_pagination_params(page, limit)

        params = (filters or SearchFilters()).to_api_params()
        if query:
            params["query"] = query
        if sort_by:
            params["sortBy"] = (
                sort_by.value if isinstance(sort_by, SearchSortOption) else sort_by
            )
        params["page"] = page
        params["limit"] = limit

        return await self.client.get("/hotels/search", params=params)

    async def get_hotel(
        self, hotel_id: str | None = None, slug: str | None = None
    ) -> APIResponse:
        if hotel_id:
            endpoint = f"/hotels/{hotel_id}"
        elif slug:
            endpoint = f"/hotels/slug/{slug}"
        else:
            raise ValidationError("Either hotel_id or slug is required")
        return await self.client.get(endpoint)

    async def get_availability(
        self,
        hotel_id: str,
        check_in_date: str,
        check_out_date: str,
        room_id: str | None = None,
    ) -> APIResponse:
        params = {
            "hotelId": hotel_id,
            "checkInDate": check_in_date,
            "checkOutDate": check_out_date,
        }
        if room_id:
            params["roomId"] = room_id
        return await self.client.get("/hotels/availability", params=params)

    async def book_hotel(self, request: BookHotelRequest | dict[str, Any]) -> APIResponse:
        if isinstance(request, dict):
            request = BookHotelRequest.model_validate(request)
        return await self.client.post("/hotels/book", json_data=request.to_api())

    async def get_featured_hotels(self, limit: int = 6) -> APIResponse:
        return await self.client.get("/hotels/featured", params={"limit": limit})

    async def get_popular_destinations(self, limit: int = 8) -> APIResponse:
        return await self.client.get("/destinations/popular", params={"limit": limit})

    async def get_hotel_reviews(
        self, hotel_id: str, page: int = 1, limit: int = 10
    ) -> APIResponse:
        return await self.client.get(
            f"/hotels/{hotel_id}/reviews", params={"page": page, "limit": limit}
        )

    async def add_review(self, hotel_id: str, review: dict[str, Any]) -> APIResponse:
        return await self.client.post(f"/hotels/{hotel_id}/reviews", json_data=review)

    async def toggle_favorite(self, hotel_id: str) -> APIResponse:
        return await self.client.post(f"/hotels/{hotel_id}/favorite")

    async def get_favorites(self, page: int = 1, limit: int = 10) -> APIResponse:
        return await self.client.get(
            "/hotels/favorites", params={"page": page, "limit": limit}
        )

    async def get_similar_hotels(self, hotel_id: str, limit: int = 4) -> APIResponse:
        return await self.client.get(
            f"/hotels/{hotel_id}/similar", params={"limit": limit}
        )

    async def get_hotels_near_location(
        self, lat: float, lng: float, radius: float = 10, limit: int = 20
    ) -> APIResponse:
        return await self.client.get(
            "/hotels/nearby",
            params={"lat": lat, "lng": lng, "radius": radius, "limit": limit},
        )

    async def get_price_comparison(
        self, hotel_id: str, check_in_date: str, check_out_date: str
    ) -> APIResponse:
        return await self.client.get(
            f"/hotels/{hotel_id}/price-comparison",
            params={"checkInDate": check_in_date, "checkOutDate": check_out_date},
        )

    async def get_real_time_availability(
        self, hotel_id: str, room_id: str | None = None
    ) -> APIResponse:
        if room_id:
            endpoint = f"/hotels/{hotel_id}/rooms/{room_id}/realtime-availability"
        else:
            endpoint = f"/hotels/{hotel_id}/realtime-availability"
        return await self.client.get(endpoint)

    async def get_suggestions(self, query: str, limit: int = 5) -> APIResponse:
        return await self.client.get(
            "/hotels/suggestions", params={"query": query, "limit": limit}
        )

    async def get_room_types(
        self,
        hotel_id: str,
        check_in_date: str | None = None,
        check_out_date: str | None = None,
    ) -> APIResponse:
        params = {}
        if check_in_date:
            params["checkInDate"] = check_in_date
        if check_out_date:
            params["checkOutDate"] = check_out_date
        return await self.client.get(f"/hotels/{hotel_id}/room-types", params=params)

    async def calculate_booking_total(
        self,
        hotel_id: str,
        room_id: str,
        check_in_date: str,
        check_out_date: str,
        rooms: int,
    ) -> APIResponse:
        return await self.client.post(
            "/hotels/calculate-total",
            json_data={
                "hotelId": hotel_id,
                "roomId": room_id,
                "checkInDate": check_in_date,
                "checkOutDate": check_out_date,
                "rooms": rooms,
            },
        )

    async def validate_booking(
        self, request: BookHotelRequest | dict[str, Any]
    ) -> APIResponse:
        if isinstance(request, dict):
            request = BookHotelRequest.model_validate(request)
        return await self.client.post(
            "/hotels/validate-booking", json_data=request.to_api()
        )

    async def get_booking_confirmation(self, booking_id: str) -> APIResponse:
        return await self.client.get(f"/bookings/{booking_id}")

    async def cancel_booking(
        self, booking_id: str, reason: str | None = None
    ) -> APIResponse:
        return await self.client.post(
            f"/bookings/{booking_id}/cancel", json_data={"reason": reason}
        )

    async def modify_booking(
        self, booking_id: str, modifications: dict[str, Any]
    ) -> APIResponse:
        return await self.client.patch(
            f"/bookings/{booking_id}", json_data=modifications
        )

    async def get_user_bookings(self, page: int = 1, limit: int = 10) -> APIResponse:
        return await self.client.get("/bookings", params={"page": page, "limit": limit})
