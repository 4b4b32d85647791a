"""
Authentication state container.

Holds the signed-in user, persists the access/refresh token pair, and runs
a background task that refreshes the access token while a user is signed
in. Login and registration never raise to the caller; they report failure
through the notifier and return False.
"""

import asyncio
import contextlib
import logging
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from hotel_booking_client.clients.auth_api import AuthApi
from hotel_booking_client.clients.base_client import APIResponse
from hotel_booking_client.config.settings import Settings
from hotel_booking_client.models.user import (
    AuthTokens,
    LoginResult,
    Permissions,
    RegisterRequest,
    User,
)
from hotel_booking_client.storage import (
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    KeyValueStore,
)
from hotel_booking_client.utils.exceptions import HotelBookingError
from hotel_booking_client.utils.navigation import HOME_PATH, Navigator
from hotel_booking_client.utils.notifications import Notifier

logger = logging.getLogger(__name__)


class AuthState:
    """Current user and token lifecycle."""

    def __init__(
        self,
        auth_api: AuthApi,
        storage: KeyValueStore,
        notifier: Notifier | None = None,
        settings: Settings | None = None,
        navigator: Navigator | None = None,
    ) -> None:
        self.auth_api = auth_api
        self.storage = storage
        self.notifier = notifier or Notifier()
        self.settings = settings or Settings()
        self.navigator = navigator or Navigator()

        self.user: User | None = None
        self.loading = False
        self._refresh_task: asyncio.Task | None = None
        self._logout_listeners: list[Callable[[], None]] = []

        auth_api.client.add_session_expired_listener(self._on_session_expired)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def permissions(self) -> Permissions:
        return Permissions(role=self.user.role if self.user else None)

    @property
    def refresh_timer_active(self) -> bool:
        return self._refresh_task is not None and not self._refresh_task.done()

    def add_logout_listener(self, listener: Callable[[], None]) -> None:
        self._logout_listeners.append(listener)

    async def init_auth(self) -> User | None:
        """Restore the user from a stored access token."""
        self.loading = True
        try:
            if self.storage.get(ACCESS_TOKEN_KEY):
                try:
                    user = await self.auth_api.get_profile()
                except (HotelBookingError, PydanticValidationError) as e:
                    logger.error(f"Failed to restore session: {e}")
                    user = None
                if user:
                    self._set_user(user)
                else:
                    logger.info("Stored access token rejected, clearing tokens")
                    self._clear_tokens()
        finally:
            self.loading = False
        return self.user

    async def login(self, email: str, password: str) -> bool:
        self.loading = True
        try:
            response = await self.auth_api.login(email, password)
        except HotelBookingError as e:
            logger.warning(f"Login error: {e}")
            return False
        finally:
            self.loading = False

        return self._complete_sign_in(
            response, "Successfully logged in!", "Login failed"
        )

    async def register(self, data: RegisterRequest | dict[str, Any]) -> bool:
        self.loading = True
        try:
            response = await self.auth_api.register(data)
        except HotelBookingError as e:
            logger.warning(f"Registration error: {e}")
            return False
        except PydanticValidationError as e:
            logger.warning(f"Invalid registration data: {e}")
            self.notifier.error("Registration failed. Please check your details.")
            return False
        finally:
            self.loading = False

        return self._complete_sign_in(
            response, "Account created successfully!", "Registration failed"
        )

    def logout(self) -> None:
        """Forget tokens and user, return to the home page."""
        self._clear_tokens()
        self.user = None
        self._stop_refresh_timer()
        self.navigator.push(HOME_PATH)
        self.notifier.success("Successfully logged out!")

        for listener in self._logout_listeners:
            listener()

    def update_user(self, **fields: Any) -> User | None:
        if self.user:
            self.user = self.user.model_copy(update=fields)
        return self.user

    async def refresh_token(self) -> bool:
        """
        Exchange the stored refresh token for a new access token.

        Any failure logs the user out.
        """
        refresh_token = self.storage.get(REFRESH_TOKEN_KEY)
        if not refresh_token:
            return False

        try:
            response = await self.auth_api.refresh_token(refresh_token)
        except HotelBookingError as e:
            logger.error(f"Token refresh error: {e}")
            self.logout()
            return False

        if not response.success:
            self.logout()
            return False

        try:
            tokens = AuthTokens.model_validate(response.data or {})
        except PydanticValidationError as e:
            logger.error(f"Malformed refresh response: {e}")
            self.logout()
            return False

        self.storage.set(ACCESS_TOKEN_KEY, tokens.access_token)
        if tokens.refresh_token:
            self.storage.set(REFRESH_TOKEN_KEY, tokens.refresh_token)
        logger.info("Access token refreshed")
        return True

    async def close(self) -> None:
        """Stop the background refresh task."""
        task, self._refresh_task = self._refresh_task, None
        if task and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    def _complete_sign_in(
        self, response: APIResponse, success_message: str, failure_message: str
    ) -> bool:
        if not (response.success and response.data):
            self.notifier.error(response.message or failure_message)
            return False

        try:
            result = LoginResult.model_validate(response.data)
        except PydanticValidationError as e:
            logger.error(f"Malformed sign-in response: {e}")
            self.notifier.error(failure_message)
            return False

        self.storage.set(ACCESS_TOKEN_KEY, result.access_token)
        self.storage.set(REFRESH_TOKEN_KEY, result.refresh_token)
        self._set_user(result.user)
        logger.info("User signed in", extra={"user_id": result.user.id})
        self.notifier.success(success_message)
        return True

    def _set_user(self, user: User) -> None:
        self.user = user
        self._start_refresh_timer()

    def _clear_tokens(self) -> None:
        self.storage.remove(ACCESS_TOKEN_KEY)
        self.storage.remove(REFRESH_TOKEN_KEY)

    def _on_session_expired(self) -> None:
        self.user = None
        self._stop_refresh_timer()

    def _start_refresh_timer(self) -> None:
        if self.refresh_timer_active:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, background token refresh disabled")
            return
        self._refresh_task = loop.create_task(self._refresh_loop())

    def _stop_refresh_timer(self) -> None:
        task, self._refresh_task = self._refresh_task, None
        if task is None or task.done():
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        if task is not current:
            task.cancel()

    async def _refresh_loop(self) -> None:
        interval = self.settings.token_refresh_interval
        while self.user is not None:
            await asyncio.sleep(interval)
            if self.user is None or not self.storage.get(ACCESS_TOKEN_KEY):
                break
            await self.refresh_token()
