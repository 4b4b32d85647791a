"""
User and authentication models.

Roles only gate what the client offers to display; authorization is
enforced by the backend.
"""

from datetime import datetime
from enum import Enum

from pydantic import Field

from hotel_booking_client.models.common import BookingBaseModel


class UserRole(str, Enum):
    """Account role."""

    CUSTOMER = "CUSTOMER"
    HOST = "HOST"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


class UserPreference(BookingBaseModel):
    """Per-user display and notification preferences."""

    language: str | None = None
    currency: str | None = None
    timezone: str | None = None
    notifications: bool = True
    email_notifications: bool = Field(True, alias="emailNotifications")
    marketing_emails: bool = Field(False, alias="marketingEmails")


class User(BookingBaseModel):
    """Signed-in account."""

    id: str
    email: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    phone: str | None = None
    avatar: str | None = None
    is_verified: bool = Field(False, alias="isVerified")
    is_active: bool = Field(True, alias="isActive")
    role: UserRole = UserRole.CUSTOMER
    created_at: datetime | None = Field(None, alias="createdAt")
    updated_at: datetime | None = Field(None, alias="updatedAt")
    preferences: UserPreference | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class AuthTokens(BookingBaseModel):
    """Token pair; a refresh response carries only the access token."""

    access_token: str = Field(alias="accessToken", min_length=1)
    refresh_token: str | None = Field(None, alias="refreshToken")


class LoginResult(BookingBaseModel):
    """Payload of a successful login or registration."""

    user: User
    access_token: str = Field(alias="accessToken")
    refresh_token: str = Field(alias="refreshToken")


class RegisterRequest(BookingBaseModel):
    """New account details."""

    email: str
    password: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    phone: str | None = None


class Permissions(BookingBaseModel):
    """Role-derived UI affordances."""

    role: UserRole | None = None

    @property
    def is_admin(self) -> bool:
        return self.role in (UserRole.ADMIN, UserRole.SUPER_ADMIN)

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN

    @property
    def is_host(self) -> bool:
        return self.role == UserRole.HOST

    @property
    def is_customer(self) -> bool:
        return self.role == UserRole.CUSTOMER

    @property
    def can_manage_hotels(self) -> bool:
        return self.is_admin

    @property
    def can_manage_users(self) -> bool:
        return self.is_admin

    @property
    def can_view_analytics(self) -> bool:
        return self.is_admin

    @property
    def can_handle_bookings(self) -> bool:
        return self.is_admin

    @property
    def can_manage_settings(self) -> bool:
        return self.is_super_admin

    def has_permission(self, permission: str) -> bool:
        if self.is_super_admin:
            return True
        if self.role == UserRole.ADMIN:
            return permission != "SUPER_ADMIN_ONLY"
        return False

    def to_dict(self) -> dict[str, bool]:
        return {
            "is_admin": self.is_admin,
            "is_super_admin": self.is_super_admin,
            "is_host": self.is_host,
            "is_customer": self.is_customer,
            "can_manage_hotels": self.can_manage_hotels,
            "can_manage_users": self.can_manage_users,
            "can_view_analytics": self.can_view_analytics,
            "can_handle_bookings": self.can_handle_bookings,
            "can_manage_settings": self.can_manage_settings,
        }
