"""
Session composition.

A BookingSession wires the persistence port, notifier, navigator, HTTP
client, API facades and state containers together once at start-up.
"""

import logging
from collections.abc import Callable
from typing import Any

from hotel_booking_client.clients.auth_api import AuthApi
from hotel_booking_client.clients.base_client import BookingAPIClient
from hotel_booking_client.clients.hotel_api import HotelApi
from hotel_booking_client.config.settings import Settings, get_settings
from hotel_booking_client.state.auth import AuthState
from hotel_booking_client.state.cart import CartState
from hotel_booking_client.state.preferences import PreferencesState
from hotel_booking_client.state.recent_searches import RecentSearches
from hotel_booking_client.state.search import SearchState
from hotel_booking_client.storage import JsonFileStore, KeyValueStore
from hotel_booking_client.utils.navigation import Navigator
from hotel_booking_client.utils.notifications import Notifier

logger = logging.getLogger(__name__)


class BookingSession:
    """All client state for one user session."""

    def __init__(
        self,
        settings: Settings | None = None,
        storage: KeyValueStore | None = None,
        notifier: Notifier | None = None,
        navigator: Navigator | None = None,
        url_writer: Callable[[str], None] | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.storage = (
            storage
            if storage is not None
            else JsonFileStore(self.settings.get_storage_path())
        )
        self.notifier = notifier or Notifier()
        self.navigator = navigator or Navigator()

        self.api_client = BookingAPIClient(
            storage=self.storage,
            notifier=self.notifier,
            settings=self.settings,
            navigator=self.navigator,
        )
        self.auth_api = AuthApi(self.api_client)
        self.hotel_api = HotelApi(self.api_client)

        self.auth = AuthState(
            self.auth_api,
            self.storage,
            notifier=self.notifier,
            settings=self.settings,
            navigator=self.navigator,
        )
        self.cart = CartState(self.storage, notifier=self.notifier, settings=self.settings)
        self.recent_searches = RecentSearches(self.storage)
        self.search = SearchState(
            notifier=self.notifier,
            recent_searches=self.recent_searches,
            url_writer=url_writer,
        )
        self.preferences = PreferencesState(self.storage)

        if self.settings.clear_cart_on_logout:
            self.auth.add_logout_listener(self.cart.clear_cart)

    async def __aenter__(self) -> "BookingSession":
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def start(self) -> None:
        """Restore the signed-in user and their preferences."""
        await self.auth.init_auth()
        self.preferences.apply_user_preferences(self.auth.user)
        logger.info(
            "Booking session started",
            extra={
                "authenticated": self.auth.is_authenticated,
                "cart_items": len(self.cart.items),
            },
        )

    async def close(self) -> None:
        await self.auth.close()
        await self.api_client.close()

    def drain_messages(self) -> list[str]:
        """Return and clear the pending user notifications."""
        return [notification.message for notification in self.notifier.drain()]


def create_session(
    settings: Settings | None = None,
    storage: KeyValueStore | None = None,
    **kwargs: Any,
) -> BookingSession:
    """Create a session with the configured persistent store by default."""
    return BookingSession(settings=settings, storage=storage, **kwargs)
