"""
Cart tools for the hotel booking MCP server.

Provides MCP tools for adding room selections to the cart, adjusting and
removing items, and reading the cart totals.
"""

from collections.abc import Callable
from typing import Any

from fastmcp import FastMCP

from hotel_booking_client.clients.base_client import handle_api_response
from hotel_booking_client.clients.retry import with_retry
from hotel_booking_client.models.hotel import Hotel
from hotel_booking_client.session import BookingSession
from hotel_booking_client.utils.exceptions import (
    ResourceNotFoundError,
    ValidationError,
)
from hotel_booking_client.utils.exceptions import TimeoutError as RequestTimeoutError
from hotel_booking_client.utils.validators import validate_date_string


def _cart_payload(session: BookingSession) -> dict[str, Any]:
    return {
        "cart": session.cart.cart.to_api(),
        "item_count": session.cart.get_item_count(),
        "is_empty": session.cart.is_empty,
    }


def register_cart_tools(app: FastMCP, get_session: Callable[[], BookingSession]):
    """Register all cart-related MCP tools."""

    @app.tool()
    async def add_to_cart(
        hotel_id: str,
        room_id: str,
        check_in_date: str,
        check_out_date: str,
        guests: int = 2,
        rooms: int = 1,
    ) -> dict[str, Any]:
        """
        Add a room selection to the cart.

        Selecting the same room for the same dates again increases the room
        count of the existing item instead of adding a new one.

        Args:
            hotel_id: Hotel identifier
            room_id: Room identifier within the hotel
            check_in_date: Check-in date in YYYY-MM-DD format
            check_out_date: Check-out date in YYYY-MM-DD format
            guests: Number of guests
            rooms: Number of rooms

        Returns:
            Dictionary containing the cart item and updated cart totals
        """
        if not hotel_id or not room_id:
            raise ValidationError("hotel_id and room_id are required")

        check_in = validate_date_string(check_in_date)
        check_out = validate_date_string(check_out_date)

        session = get_session()
        response = await with_retry(
            lambda: session.hotel_api.get_hotel(hotel_id=hotel_id),
            max_retries=session.settings.max_retries,
            delay=session.settings.retry_backoff,
            retry_on=RequestTimeoutError,
        )
        hotel = Hotel.model_validate(handle_api_response(response))

        room = hotel.find_room(room_id)
        if room is None:
            raise ResourceNotFoundError(f"Room {room_id} not found in hotel {hotel_id}")

        item = session.cart.add_item(hotel, room, check_in, check_out, guests, rooms)

        return {
            "success": True,
            "item": item.to_api(),
            **_cart_payload(session),
            "notifications": session.drain_messages(),
        }

    @app.tool()
    async def remove_from_cart(item_id: str) -> dict[str, Any]:
        """
        Remove an item from the cart.

        Args:
            item_id: Cart item identifier

        Returns:
            Dictionary containing the updated cart
        """
        session = get_session()
        removed = session.cart.remove_item(item_id)
        return {
            "success": removed,
            "item_id": item_id,
            **_cart_payload(session),
            "notifications": session.drain_messages(),
        }

    @app.tool()
    async def update_cart_item(
        item_id: str, guests: int | None = None
    ) -> dict[str, Any]:
        """
        Update the guest count of a cart item.

        Args:
            item_id: Cart item identifier
            guests: New number of guests

        Returns:
            Dictionary containing the updated item
        """
        if guests is None:
            raise ValidationError("At least one field must be provided for update")
        if guests < 1:
            raise ValidationError("guests must be at least 1")

        session = get_session()
        item = session.cart.update_item(item_id, guests=guests)
        if item is None:
            return {
                "success": False,
                "error": f"Cart item not found: {item_id}",
                "item_id": item_id,
            }

        return {"success": True, "item": item.to_api(), **_cart_payload(session)}

    @app.tool()
    async def clear_cart() -> dict[str, Any]:
        """
        Remove every item from the cart.

        Returns:
            Dictionary containing the empty cart
        """
        session = get_session()
        session.cart.clear_cart()
        return {
            "success": True,
            **_cart_payload(session),
            "notifications": session.drain_messages(),
        }

    @app.tool()
    async def get_cart() -> dict[str, Any]:
        """
        Get the cart contents and totals.

        Returns:
            Dictionary containing items, subtotal, taxes, fees and total
        """
        session = get_session()
        return {"success": True, **_cart_payload(session)}
