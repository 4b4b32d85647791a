"""Hotel booking client: cart, search, account and preference state over the booking API."""

from hotel_booking_client.session import BookingSession, create_session

__version__ = "0.1.0"

__all__ = ["BookingSession", "__version__", "create_session"]
