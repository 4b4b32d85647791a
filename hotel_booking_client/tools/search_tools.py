"""
Search tools for the hotel booking MCP server.

Provides MCP tools for running hotel searches, paging through results,
editing the filter set and restoring a search from a shareable URL.
"""

from collections.abc import Callable
from typing import Any

from fastmcp import FastMCP

from hotel_booking_client.models.hotel import Hotel
from hotel_booking_client.session import BookingSession
from hotel_booking_client.state.recent_searches import POPULAR_DESTINATIONS
from hotel_booking_client.utils.exceptions import ValidationError
from hotel_booking_client.utils.validators import (
    validate_date_string,
    validate_pagination_params,
)


def _hotel_summary(hotel: Hotel) -> dict[str, Any]:
    return {
        "id": hotel.id,
        "name": hotel.name,
        "city": hotel.city,
        "country": hotel.country,
        "star_rating": hotel.star_rating,
        "average_rating": hotel.average_rating,
        "starting_price": hotel.starting_price,
        "rooms": [
            {"id": room.id, "name": room.name, "base_price": room.base_price}
            for room in hotel.rooms
        ],
    }


def _results_payload(session: BookingSession) -> dict[str, Any]:
    search = session.search
    return {
        "hotels": [_hotel_summary(hotel) for hotel in search.search_results],
        "total_results": search.total_results,
        "current_page": search.current_page,
        "has_more": search.has_more,
        "url": search.current_url,
    }


def register_search_tools(app: FastMCP, get_session: Callable[[], BookingSession]):
    """Register all search-related MCP tools."""

    @app.tool()
    async def search_hotels(
        query: str | None = None,
        location: str | None = None,
        check_in_date: str | None = None,
        check_out_date: str | None = None,
        guests: int | None = None,
        rooms: int | None = None,
        min_price: float | None = None,
        max_price: float | None = None,
        star_rating: list[int] | None = None,
        property_type: list[str] | None = None,
        amenities: list[str] | None = None,
        sort_by: str | None = None,
        limit: int = 20,
    ) -> dict[str, Any]:
        """
        Search for hotels and return the first page of results.

        Only the filters passed here are changed; filters applied earlier
        remain in effect.

        Args:
            query: Free-text search query
            location: City or destination
            check_in_date: Check-in date in YYYY-MM-DD format
            check_out_date: Check-out date in YYYY-MM-DD format
            guests: Number of guests
            rooms: Number of rooms
            min_price: Minimum nightly price
            max_price: Maximum nightly price
            star_rating: Star ratings to include
            property_type: Property types to include (HOTEL, RESORT, ...)
            amenities: Required amenities
            sort_by: Sort option such as PRICE_LOW_TO_HIGH or POPULARITY
            limit: Results per page (max 100)

        Returns:
            Dictionary containing hotel summaries and pagination state
        """
        validate_pagination_params(1, limit)

        if (min_price is None) != (max_price is None):
            raise ValidationError("min_price and max_price must be given together")

        updates: dict[str, Any] = {}
        if location is not None:
            updates["location"] = location
        if check_in_date is not None:
            updates["check_in_date"] = validate_date_string(check_in_date)
        if check_out_date is not None:
            updates["check_out_date"] = validate_date_string(check_out_date)
        if guests is not None:
            updates["guests"] = guests
        if rooms is not None:
            updates["rooms"] = rooms
        if min_price is not None and max_price is not None:
            if min_price > max_price:
                raise ValidationError("min_price cannot exceed max_price")
            updates["price_range"] = (min_price, max_price)
        if star_rating is not None:
            updates["star_rating"] = star_rating
        if property_type is not None:
            updates["property_type"] = [p.upper() for p in property_type]
        if amenities is not None:
            updates["amenities"] = amenities

        session = get_session()
        search = session.search

        if query is not None:
            search.set_search_query(query)
        if updates:
            search.apply_filters(updates)
        if sort_by is not None:
            try:
                search.set_sort_by(sort_by.upper())
            except ValueError as e:
                raise ValidationError(f"Invalid sort option: {sort_by}") from e

        success = await search.search(session.hotel_api, page=1, limit=limit)

        return {
            "success": success,
            **_results_payload(session),
            "active_filters": search.get_active_filters_count(),
            "notifications": session.drain_messages(),
        }

    @app.tool()
    async def load_more_results() -> dict[str, Any]:
        """
        Fetch the next page of the current search.

        Returns:
            Dictionary containing all results loaded so far
        """
        session = get_session()
        loaded = await session.search.load_more(session.hotel_api)
        return {
            "success": loaded,
            **_results_payload(session),
            "notifications": session.drain_messages(),
        }

    @app.tool()
    async def apply_search_filters(filters: dict[str, Any]) -> dict[str, Any]:
        """
        Merge filter changes into the current search.

        Args:
            filters: Filter values keyed by name (e.g. {"starRating": [4, 5]})

        Returns:
            Dictionary containing the resulting filters
        """
        if not filters:
            raise ValidationError("No filters provided")

        session = get_session()
        session.search.apply_filters(filters)
        return {"success": True, "search": session.search.to_dict()}

    @app.tool()
    async def remove_search_filter(filter_name: str) -> dict[str, Any]:
        """
        Unset one filter of the current search.

        Args:
            filter_name: Filter to remove (e.g. "amenities")

        Returns:
            Dictionary containing the resulting filters
        """
        session = get_session()
        session.search.remove_filter(filter_name)
        return {"success": True, "search": session.search.to_dict()}

    @app.tool()
    async def clear_search_filters() -> dict[str, Any]:
        """Reset all filters to their defaults."""
        session = get_session()
        session.search.clear_filters()
        return {"success": True, "search": session.search.to_dict()}

    @app.tool()
    async def get_search_state() -> dict[str, Any]:
        """Return the current query, filters, sort and pagination."""
        session = get_session()
        return {"success": True, "search": session.search.to_dict()}

    @app.tool()
    async def restore_search_from_url(url: str) -> dict[str, Any]:
        """
        Restore query, filters and sort from a search URL.

        Args:
            url: Full search URL or its query string

        Returns:
            Dictionary containing the restored search state
        """
        session = get_session()
        session.search.hydrate_from_url(url)
        return {"success": True, "search": session.search.to_dict()}

    @app.tool()
    async def get_recent_searches() -> dict[str, Any]:
        """Return recently searched locations and popular destinations."""
        session = get_session()
        return {
            "success": True,
            "recent_searches": session.recent_searches.searches,
            "popular_destinations": POPULAR_DESTINATIONS,
        }
