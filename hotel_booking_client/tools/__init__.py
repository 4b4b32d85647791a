"""MCP tool registrations for the hotel booking client."""

from hotel_booking_client.tools.auth_tools import register_auth_tools
from hotel_booking_client.tools.cart_tools import register_cart_tools
from hotel_booking_client.tools.search_tools import register_search_tools

__all__ = ["register_auth_tools", "register_cart_tools", "register_search_tools"]
