"""
Unit tests for the MCP tool registrations.

Tools are collected with a stand-in app object and invoked directly against
a BookingSession whose HTTP traffic goes to a fake backend.
"""

import json
import logging

import httpx
import pytest
import pytest_asyncio

from hotel_booking_client import main
from hotel_booking_client.main import JSONFormatter
from hotel_booking_client.session import BookingSession
from hotel_booking_client.tools import (
    register_auth_tools,
    register_cart_tools,
    register_search_tools,
)
from hotel_booking_client.utils.exceptions import ResourceNotFoundError, ValidationError


class _ToolCollector:
    """Stand-in for FastMCP that records registered tool functions."""

    def __init__(self) -> None:
        self.tools = {}

    def tool(self):
        def decorator(fn):
            self.tools[fn.__name__] = fn
            return fn

        return decorator


class FakeBookingBackend:
    def __init__(self, hotel_data: dict, user_data: dict) -> None:
        self.hotel_data = hotel_data
        self.user_data = user_data
        self.timeouts_remaining = 0
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")

        if path == "/hotels/hotel-1":
            if self.timeouts_remaining:
                self.timeouts_remaining -= 1
                raise httpx.ReadTimeout("slow", request=request)
            return httpx.Response(200, json={"success": True, "data": self.hotel_data})

        if path == "/hotels/search":
            return httpx.Response(
                200,
                json={
                    "success": True,
                    "data": {
                        "hotels": [self.hotel_data],
                        "totalResults": 1,
                        "page": 1,
                        "totalPages": 1,
                    },
                },
            )

        if path == "/auth/login":
            if json.loads(request.content).get("password") != "correct-horse":
                return httpx.Response(
                    401, json={"success": False, "message": "Invalid credentials"}
                )
            return httpx.Response(
                200,
                json={
                    "success": True,
                    "data": {
                        "user": self.user_data,
                        "accessToken": "access-0",
                        "refreshToken": "refresh-1",
                    },
                },
            )

        return httpx.Response(404, json={"success": False, "message": "Not found"})


@pytest.fixture
def backend(hotel_data, user_data) -> FakeBookingBackend:
    return FakeBookingBackend(hotel_data, user_data)


@pytest_asyncio.fixture
async def session(settings, storage, notifier, navigator, backend):
    booking_session = BookingSession(
        settings=settings, storage=storage, notifier=notifier, navigator=navigator
    )
    booking_session.api_client._session = httpx.AsyncClient(
        transport=httpx.MockTransport(backend)
    )
    yield booking_session
    await booking_session.close()


@pytest.fixture
def tools(session) -> dict:
    app = _ToolCollector()
    register_search_tools(app, lambda: session)
    register_cart_tools(app, lambda: session)
    register_auth_tools(app, lambda: session)
    return app.tools


class TestRegistration:
    def test_all_tools_registered(self, tools):
        assert set(tools) == {
            "search_hotels",
            "load_more_results",
            "apply_search_filters",
            "remove_search_filter",
            "clear_search_filters",
            "get_search_state",
            "restore_search_from_url",
            "get_recent_searches",
            "add_to_cart",
            "remove_from_cart",
            "update_cart_item",
            "clear_cart",
            "get_cart",
            "login",
            "register",
            "logout",
            "get_current_user",
            "refresh_session",
        }


class TestCartTools:
    @pytest.mark.asyncio
    async def test_add_to_cart(self, tools):
        result = await tools["add_to_cart"](
            "hotel-1", "room-1", "2025-06-01", "2025-06-03", guests=2, rooms=1
        )

        assert result["success"] is True
        assert result["item"]["grandTotal"] == pytest.approx(350)
        assert result["cart"]["total"] == pytest.approx(350)
        assert result["item_count"] == 1
        assert result["notifications"] == ["Added to cart!"]

    @pytest.mark.asyncio
    async def test_add_to_cart_retries_timeouts(self, tools, backend):
        backend.timeouts_remaining = 1

        result = await tools["add_to_cart"](
            "hotel-1", "room-1", "2025-06-01", "2025-06-03"
        )

        assert result["success"] is True
        assert len(backend.requests) == 2

    @pytest.mark.asyncio
    async def test_add_to_cart_unknown_room(self, tools, session):
        with pytest.raises(ResourceNotFoundError):
            await tools["add_to_cart"]("hotel-1", "room-9", "2025-06-01", "2025-06-03")
        assert session.cart.is_empty

    @pytest.mark.asyncio
    async def test_add_to_cart_bad_date(self, tools, backend):
        with pytest.raises(ValidationError):
            await tools["add_to_cart"]("hotel-1", "room-1", "June 1", "2025-06-03")
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_update_remove_and_clear(self, tools):
        added = await tools["add_to_cart"](
            "hotel-1", "room-1", "2025-06-01", "2025-06-03"
        )
        item_id = added["item"]["id"]

        updated = await tools["update_cart_item"](item_id, guests=3)
        assert updated["item"]["guests"] == 3

        missing = await tools["update_cart_item"]("nope", guests=1)
        assert missing["success"] is False

        removed = await tools["remove_from_cart"](item_id)
        assert removed["success"] is True
        assert removed["is_empty"] is True

        cleared = await tools["clear_cart"]()
        assert cleared["notifications"] == ["Cart cleared!"]

        cart = await tools["get_cart"]()
        assert cart["cart"]["items"] == []

    @pytest.mark.asyncio
    async def test_update_requires_a_field(self, tools):
        with pytest.raises(ValidationError):
            await tools["update_cart_item"]("any")


class TestSearchTools:
    @pytest.mark.asyncio
    async def test_search_hotels(self, tools, backend):
        result = await tools["search_hotels"](
            location="Paris",
            check_in_date="2025-06-01",
            check_out_date="2025-06-03",
            star_rating=[4, 5],
            sort_by="price_low_to_high",
        )

        assert result["success"] is True
        assert result["hotels"][0]["name"] == "Grand Plaza"
        assert result["total_results"] == 1
        assert result["has_more"] is False
        assert result["active_filters"] == 3
        assert "location=Paris" in result["url"]

        params = backend.requests[-1].url.params
        assert params["location"] == "Paris"
        assert params["starRating"] == "4,5"
        assert params["sortBy"] == "PRICE_LOW_TO_HIGH"

        recent = await tools["get_recent_searches"]()
        assert recent["recent_searches"] == ["Paris"]
        assert len(recent["popular_destinations"]) == 8

    @pytest.mark.asyncio
    async def test_invalid_sort(self, tools):
        with pytest.raises(ValidationError):
            await tools["search_hotels"](sort_by="cheapest")

    @pytest.mark.asyncio
    async def test_price_bounds_must_pair(self, tools):
        with pytest.raises(ValidationError):
            await tools["search_hotels"](min_price=10)

    @pytest.mark.asyncio
    async def test_filter_editing(self, tools):
        applied = await tools["apply_search_filters"]({"amenities": ["wifi"], "guests": 3})
        assert applied["search"]["active_filters"] == 2

        removed = await tools["remove_search_filter"]("amenities")
        assert removed["search"]["active_filters"] == 1

        cleared = await tools["clear_search_filters"]()
        assert cleared["search"]["active_filters"] == 0

    @pytest.mark.asyncio
    async def test_restore_from_url(self, tools):
        result = await tools["restore_search_from_url"](
            "https://hotels.example.com/search?q=spa&location=Rome&sort=NEWEST"
        )

        state = result["search"]
        assert state["search_query"] == "spa"
        assert state["filters"]["location"] == "Rome"
        assert state["sort_by"] == "NEWEST"

        current = await tools["get_search_state"]()
        assert current["search"]["url"] == "?q=spa&location=Rome&sort=NEWEST"


class TestAuthTools:
    @pytest.mark.asyncio
    async def test_login_failure(self, tools):
        result = await tools["login"]("jane@example.com", "wrong")

        assert result["success"] is False
        assert result["authenticated"] is False
        assert result["notifications"] == ["Invalid credentials"]

    @pytest.mark.asyncio
    async def test_login_applies_account_language(self, tools, session):
        result = await tools["login"]("jane@example.com", "correct-horse")

        assert result["success"] is True
        assert result["user"]["firstName"] == "Jane"
        assert result["permissions"]["is_customer"] is True
        assert session.preferences.language == "fr"

    @pytest.mark.asyncio
    async def test_logout(self, tools):
        await tools["login"]("jane@example.com", "correct-horse")

        result = await tools["logout"]()

        assert result["current_path"] == "/"
        assert result["notifications"] == ["Successfully logged out!"]
        current = await tools["get_current_user"]()
        assert current["user"] is None

    @pytest.mark.asyncio
    async def test_login_rejects_bad_email(self, tools):
        with pytest.raises(ValidationError):
            await tools["login"]("jane", "pw")


class TestSession:
    @pytest.mark.asyncio
    async def test_cart_kept_on_logout_by_default(self, tools, session):
        await tools["add_to_cart"]("hotel-1", "room-1", "2025-06-01", "2025-06-03")
        await tools["login"]("jane@example.com", "correct-horse")

        session.auth.logout()

        assert not session.cart.is_empty

    @pytest.mark.asyncio
    async def test_cart_cleared_on_logout_when_configured(self, settings, storage):
        configured = settings.model_copy(update={"clear_cart_on_logout": True})
        booking_session = BookingSession(settings=configured, storage=storage)

        booking_session.auth.logout()

        assert "Cart cleared!" in booking_session.notifier.messages
        await booking_session.close()


class TestServerTools:
    @pytest.fixture
    def server_session(self, session, monkeypatch):
        monkeypatch.setattr(main, "session", session)
        return session

    @staticmethod
    def _call(tool):
        return getattr(tool, "fn", tool)

    @pytest.mark.asyncio
    async def test_health_check_keeps_pending_notifications(self, server_session):
        server_session.notifier.success("Updated booking quantity!")

        result = await self._call(main.health_check)()

        assert result["checks"]["backend"]["status"] == "error"
        assert server_session.notifier.messages == ["Updated booking quantity!"]

    @pytest.mark.asyncio
    async def test_set_preferences(self, server_session):
        result = await self._call(main.set_preferences)(theme="dark", language="ar")

        assert result["preferences"]["theme"] == "dark"
        assert result["preferences"]["rtl"] is True

    @pytest.mark.asyncio
    async def test_set_preferences_rejects_unknown_theme(self, server_session):
        with pytest.raises(ValidationError):
            await self._call(main.set_preferences)(theme="sepia")


class TestJSONFormatter:
    def test_includes_extra_fields(self):
        record = logging.makeLogRecord(
            {"name": "test", "levelname": "INFO", "msg": "hello", "item_id": "r1"}
        )

        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "hello"
        assert entry["item_id"] == "r1"
        assert "args" not in entry
