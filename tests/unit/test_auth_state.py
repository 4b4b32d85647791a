"""
Unit tests for AuthState.

Runs the real AuthApi and BookingAPIClient against a mocked transport so
the token lifecycle is exercised end to end.
"""

import asyncio
import json

import httpx
import pytest

from hotel_booking_client.clients.auth_api import AuthApi
from hotel_booking_client.state.auth import AuthState
from hotel_booking_client.storage import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY
from hotel_booking_client.utils.exceptions import AuthenticationError
from hotel_booking_client.utils.navigation import LOGIN_PATH


class FakeBackend:
    """Minimal auth backend keyed on request path."""

    def __init__(self, user_data: dict) -> None:
        self.user_data = user_data
        self.password = "correct-horse"
        self.valid_refresh_tokens = {"refresh-1"}
        self.issued = 0
        self.calls: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api")
        self.calls.append(path)
        body = json.loads(request.content) if request.content else {}

        if path == "/auth/login":
            if body.get("password") != self.password:
                return httpx.Response(
                    401, json={"success": False, "message": "Invalid credentials"}
                )
            return httpx.Response(200, json=self._sign_in_payload())

        if path == "/auth/register":
            return httpx.Response(201, json=self._sign_in_payload())

        if path == "/auth/refresh":
            if body.get("refreshToken") not in self.valid_refresh_tokens:
                return httpx.Response(
                    401, json={"success": False, "message": "Invalid refresh token"}
                )
            self.issued += 1
            return httpx.Response(
                200,
                json={"success": True, "data": {"accessToken": f"access-{self.issued}"}},
            )

        if path == "/auth/profile":
            if request.headers.get("Authorization", "").startswith("Bearer access"):
                return httpx.Response(200, json={"success": True, "data": self.user_data})
            return httpx.Response(401, json={"success": False, "message": "Expired"})

        return httpx.Response(401, json={"success": False, "message": "Expired"})

    def _sign_in_payload(self) -> dict:
        return {
            "success": True,
            "data": {
                "user": self.user_data,
                "accessToken": "access-0",
                "refreshToken": "refresh-1",
            },
        }


@pytest.fixture
def backend(user_data) -> FakeBackend:
    return FakeBackend(user_data)


@pytest.fixture
def make_auth(make_client, backend, storage, notifier, settings, navigator):
    def _make(**setting_overrides) -> AuthState:
        auth_settings = settings.model_copy(update=setting_overrides)
        client = make_client(backend)
        return AuthState(
            AuthApi(client),
            storage,
            notifier=notifier,
            settings=auth_settings,
            navigator=navigator,
        )

    return _make


class TestLogin:
    """Login and registration."""

    @pytest.mark.asyncio
    async def test_wrong_credentials(self, make_auth, storage, notifier):
        auth = make_auth()

        assert await auth.login("jane@example.com", "wrong") is False

        assert auth.user is None
        assert storage.get(ACCESS_TOKEN_KEY) is None
        assert storage.get(REFRESH_TOKEN_KEY) is None
        assert notifier.messages == ["Invalid credentials"]
        assert auth.loading is False

    @pytest.mark.asyncio
    async def test_successful_login(self, make_auth, storage, notifier, backend):
        auth = make_auth()

        assert await auth.login("jane@example.com", "correct-horse") is True

        assert auth.is_authenticated
        assert auth.user.email == "jane@example.com"
        assert storage.get(ACCESS_TOKEN_KEY) == "access-0"
        assert storage.get(REFRESH_TOKEN_KEY) == "refresh-1"
        assert notifier.messages == ["Successfully logged in!"]
        assert auth.refresh_timer_active
        assert backend.calls == ["/auth/login"]
        await auth.close()
        assert not auth.refresh_timer_active

    @pytest.mark.asyncio
    async def test_unsuccessful_envelope(self, make_auth, notifier):
        auth = make_auth()

        def locked(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": False, "message": "Account locked"})

        auth.auth_api.client._session = httpx.AsyncClient(
            transport=httpx.MockTransport(locked)
        )

        assert await auth.login("jane@example.com", "x") is False
        assert notifier.messages == ["Account locked"]

    @pytest.mark.asyncio
    async def test_register(self, make_auth, storage, notifier):
        auth = make_auth()

        ok = await auth.register(
            {
                "email": "jane@example.com",
                "password": "secret",
                "firstName": "Jane",
                "lastName": "Doe",
            }
        )

        assert ok is True
        assert storage.get(ACCESS_TOKEN_KEY) == "access-0"
        assert notifier.messages == ["Account created successfully!"]
        await auth.close()

    @pytest.mark.asyncio
    async def test_register_with_incomplete_data(self, make_auth, backend, notifier):
        auth = make_auth()

        assert await auth.register({"email": "jane@example.com"}) is False
        assert backend.calls == []
        assert len(notifier.messages) == 1

    @pytest.mark.asyncio
    async def test_permissions_follow_role(self, make_auth, backend):
        backend.user_data = {**backend.user_data, "role": "ADMIN"}
        auth = make_auth()

        assert auth.permissions.is_admin is False
        await auth.login("jane@example.com", "correct-horse")

        assert auth.permissions.is_admin is True
        assert auth.permissions.can_manage_hotels is True
        assert auth.permissions.can_manage_settings is False
        await auth.close()


class TestLogout:
    """Explicit logout."""

    @pytest.mark.asyncio
    async def test_logout_clears_everything(
        self, make_auth, storage, notifier, navigator
    ):
        auth = make_auth()
        await auth.login("jane@example.com", "correct-horse")
        navigator.push("/account")
        called = []
        auth.add_logout_listener(lambda: called.append(True))

        auth.logout()

        assert auth.user is None
        assert storage.get(ACCESS_TOKEN_KEY) is None
        assert storage.get(REFRESH_TOKEN_KEY) is None
        assert navigator.current_path == "/"
        assert notifier.messages[-1] == "Successfully logged out!"
        assert called == [True]
        assert not auth.refresh_timer_active


class TestInitAuth:
    """Restoring a user from stored tokens."""

    @pytest.mark.asyncio
    async def test_no_token_means_no_request(self, make_auth, backend):
        auth = make_auth()

        assert await auth.init_auth() is None
        assert backend.calls == []
        assert auth.loading is False

    @pytest.mark.asyncio
    async def test_valid_token_restores_user(self, make_auth, storage):
        storage.set(ACCESS_TOKEN_KEY, "access-0")
        auth = make_auth()

        user = await auth.init_auth()

        assert user is not None
        assert user.first_name == "Jane"
        assert auth.refresh_timer_active
        await auth.close()

    @pytest.mark.asyncio
    async def test_rejected_token_is_cleared(self, make_auth, storage):
        storage.set(ACCESS_TOKEN_KEY, "stale")
        auth = make_auth()

        assert await auth.init_auth() is None
        assert storage.get(ACCESS_TOKEN_KEY) is None

    @pytest.mark.asyncio
    async def test_malformed_profile_clears_tokens(self, make_auth, storage, backend):
        storage.set(ACCESS_TOKEN_KEY, "access-0")
        storage.set(REFRESH_TOKEN_KEY, "refresh-1")
        backend.user_data = {"id": "user-1"}
        auth = make_auth()

        assert await auth.init_auth() is None

        assert auth.user is None
        assert storage.get(ACCESS_TOKEN_KEY) is None
        assert storage.get(REFRESH_TOKEN_KEY) is None
        assert auth.loading is False


class TestTokenRefresh:
    """Explicit, background and on-401 refresh."""

    @pytest.mark.asyncio
    async def test_refresh_stores_new_token(self, make_auth, storage):
        auth = make_auth()
        await auth.login("jane@example.com", "correct-horse")

        assert await auth.refresh_token() is True
        assert storage.get(ACCESS_TOKEN_KEY) == "access-1"
        await auth.close()

    @pytest.mark.asyncio
    async def test_refresh_failure_logs_out(self, make_auth, storage, backend, navigator):
        auth = make_auth()
        await auth.login("jane@example.com", "correct-horse")
        backend.valid_refresh_tokens.clear()

        assert await auth.refresh_token() is False

        assert auth.user is None
        assert storage.get(ACCESS_TOKEN_KEY) is None
        assert navigator.current_path == "/"

    @pytest.mark.asyncio
    async def test_refresh_without_token(self, make_auth, backend):
        auth = make_auth()
        assert await auth.refresh_token() is False
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_background_refresh(self, make_auth, storage, backend):
        auth = make_auth(token_refresh_interval=0.01)
        await auth.login("jane@example.com", "correct-horse")

        await asyncio.sleep(0.1)

        assert "/auth/refresh" in backend.calls
        assert storage.get(ACCESS_TOKEN_KEY).startswith("access-")
        assert storage.get(ACCESS_TOKEN_KEY) != "access-0"
        await auth.close()

    @pytest.mark.asyncio
    async def test_background_refresh_failure_stops_timer(self, make_auth, backend):
        auth = make_auth(token_refresh_interval=0.01)
        await auth.login("jane@example.com", "correct-horse")
        backend.valid_refresh_tokens.clear()

        await asyncio.sleep(0.1)

        assert auth.user is None
        assert not auth.refresh_timer_active

    @pytest.mark.asyncio
    async def test_expired_session_during_request(
        self, make_auth, storage, backend, navigator
    ):
        auth = make_auth()
        await auth.login("jane@example.com", "correct-horse")
        backend.valid_refresh_tokens.clear()

        with pytest.raises(AuthenticationError):
            await auth.auth_api.client.get("/bookings")

        assert auth.user is None
        assert storage.get(REFRESH_TOKEN_KEY) is None
        assert navigator.current_path == LOGIN_PATH
        assert not auth.refresh_timer_active
