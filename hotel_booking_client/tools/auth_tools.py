"""
Account tools for the hotel booking MCP server.

Provides MCP tools for signing in and out, creating an account and
inspecting the signed-in user.
"""

from collections.abc import Callable
from typing import Any

from fastmcp import FastMCP

from hotel_booking_client.models.user import RegisterRequest
from hotel_booking_client.session import BookingSession
from hotel_booking_client.utils.exceptions import ValidationError
from hotel_booking_client.utils.validators import (
    validate_email,
    validate_required_fields,
)


def _user_payload(session: BookingSession) -> dict[str, Any]:
    user = session.auth.user
    return {
        "authenticated": session.auth.is_authenticated,
        "user": user.to_api() if user else None,
        "permissions": session.auth.permissions.to_dict(),
    }


def register_auth_tools(app: FastMCP, get_session: Callable[[], BookingSession]):
    """Register all account-related MCP tools."""

    @app.tool()
    async def login(email: str, password: str) -> dict[str, Any]:
        """
        Sign in with email and password.

        Args:
            email: Account email address
            password: Account password

        Returns:
            Dictionary containing the signed-in user on success
        """
        validate_email(email)
        if not password:
            raise ValidationError("password is required")

        session = get_session()
        success = await session.auth.login(email, password)
        if success:
            session.preferences.apply_user_preferences(session.auth.user)

        return {
            "success": success,
            **_user_payload(session),
            "notifications": session.drain_messages(),
        }

    @app.tool()
    async def register(
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        phone: str | None = None,
    ) -> dict[str, Any]:
        """
        Create an account and sign in.

        Args:
            email: Account email address
            password: Account password
            first_name: Given name
            last_name: Family name
            phone: Optional phone number

        Returns:
            Dictionary containing the new user on success
        """
        data = {
            "email": email,
            "password": password,
            "first_name": first_name,
            "last_name": last_name,
        }
        validate_required_fields(data, list(data))
        validate_email(email)

        session = get_session()
        success = await session.auth.register(
            RegisterRequest(
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
                phone=phone,
            )
        )

        return {
            "success": success,
            **_user_payload(session),
            "notifications": session.drain_messages(),
        }

    @app.tool()
    async def logout() -> dict[str, Any]:
        """Sign out and forget the stored tokens."""
        session = get_session()
        session.auth.logout()
        return {
            "success": True,
            "current_path": session.navigator.current_path,
            "notifications": session.drain_messages(),
        }

    @app.tool()
    async def get_current_user() -> dict[str, Any]:
        """Return the signed-in user and their role permissions."""
        session = get_session()
        return {"success": True, **_user_payload(session)}

    @app.tool()
    async def refresh_session() -> dict[str, Any]:
        """
        Exchange the stored refresh token for a new access token.

        A rejected refresh token signs the user out.
        """
        session = get_session()
        refreshed = await session.auth.refresh_token()
        return {
            "success": refreshed,
            **_user_payload(session),
            "notifications": session.drain_messages(),
        }
