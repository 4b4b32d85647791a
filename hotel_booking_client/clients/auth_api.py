"""
Authentication endpoints.

Credential exchanges (login, register, refresh) are sent without the
automatic refresh-on-401 so a rejected password is reported as-is.
"""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from hotel_booking_client.clients.base_client import APIResponse, BookingAPIClient
from hotel_booking_client.models.user import RegisterRequest, User
from hotel_booking_client.utils.exceptions import HotelBookingError

logger = logging.getLogger(__name__)


class AuthApi:
    """Client for the /auth endpoints."""

    def __init__(self, client: BookingAPIClient) -> None:
        self.client = client

    async def login(self, email: str, password: str) -> APIResponse:
        return await self.client.post(
            "/auth/login",
            json_data={"email": email, "password": password},
            allow_refresh=False,
        )

    async def register(self, data: RegisterRequest | dict[str, Any]) -> APIResponse:
        if isinstance(data, dict):
            data = RegisterRequest.model_validate(data)
        return await self.client.post(
            "/auth/register", json_data=data.to_api(), allow_refresh=False
        )

    async def logout(self) -> APIResponse:
        return await self.client.post("/auth/logout")

    async def get_profile(self) -> User | None:
        """Fetch the signed-in user; None when the token is missing or rejected."""
        try:
            response = await self.client.get("/auth/profile")
        except HotelBookingError as e:
            logger.warning(f"Error fetching profile: {e}")
            return None

        if not response.success or not response.data:
            return None
        try:
            return User.model_validate(response.data)
        except PydanticValidationError as e:
            logger.warning(f"Malformed profile response: {e}")
            return None

    async def update_profile(self, **fields: Any) -> APIResponse:
        return await self.client.patch("/auth/profile", json_data=fields)

    async def change_password(
        self, current_password: str, new_password: str
    ) -> APIResponse:
        return await self.client.post(
            "/auth/change-password",
            json_data={
                "currentPassword": current_password,
                "newPassword": new_password,
            },
        )

    async def request_password_reset(self, email: str) -> APIResponse:
        return await self.client.post(
            "/auth/forgot-password", json_data={"email": email}
        )

    async def confirm_password_reset(
        self, token: str, password: str, confirm_password: str
    ) -> APIResponse:
        return await self.client.post(
            "/auth/reset-password",
            json_data={
                "token": token,
                "password": password,
                "confirmPassword": confirm_password,
            },
        )

    async def refresh_token(self, refresh_token: str) -> APIResponse:
        return await self.client.refresh_token(refresh_token)

    async def verify_email(self, token: str) -> APIResponse:
        return await self.client.post("/auth/verify-email", json_data={"token": token})

    async def resend_verification_email(self) -> APIResponse:
        return await self.client.post("/auth/resend-verification")

    async def enable_two_factor(self) -> APIResponse:
        return await self.client.post("/auth/2fa/enable")

    async def confirm_two_factor(self, code: str) -> APIResponse:
        return await self.client.post("/auth/2fa/confirm", json_data={"code": code})

    async def disable_two_factor(self, code: str) -> APIResponse:
        return await self.client.post("/auth/2fa/disable", json_data={"code": code})
