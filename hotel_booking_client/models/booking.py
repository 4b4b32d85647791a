"""
Booking models.

BookHotelRequest is what the client posts to the booking endpoint; Booking
is the confirmed reservation returned by the backend.
"""

from datetime import datetime
from enum import Enum

from pydantic import Field

from hotel_booking_client.models.cart import CartItem
from hotel_booking_client.models.common import BookingBaseModel


class BookingStatus(str, Enum):
    """Reservation lifecycle state."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


class PaymentStatus(str, Enum):
    """Payment lifecycle state."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"
    PARTIALLY_REFUNDED = "PARTIALLY_REFUNDED"


class PaymentMethod(str, Enum):
    """Payment methods offered at checkout."""

    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    PAYPAL = "PAYPAL"
    STRIPE = "STRIPE"
    BANK_TRANSFER = "BANK_TRANSFER"
    APPLE_PAY = "APPLE_PAY"
    GOOGLE_PAY = "GOOGLE_PAY"
    PAY_AT_PROPERTY = "PAY_AT_PROPERTY"


class GuestInfo(BookingBaseModel):
    """Lead guest contact details."""

    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    phone: str


class BookHotelRequest(BookingBaseModel):
    """Booking submission for one room selection."""

    hotel_id: str = Field(alias="hotelId")
    room_id: str = Field(alias="roomId")
    check_in_date: str = Field(alias="checkInDate")
    check_out_date: str = Field(alias="checkOutDate")
    guests: int = Field(ge=1)
    rooms: int = Field(ge=1)
    guest_info: GuestInfo = Field(alias="guestInfo")
    special_requests: str | None = Field(None, alias="specialRequests")
    payment_method: PaymentMethod = Field(alias="paymentMethod")

    @classmethod
    def from_cart_item(
        cls,
        item: CartItem,
        guest_info: GuestInfo,
        payment_method: PaymentMethod | str,
        special_requests: str | None = None,
    ) -> "BookHotelRequest":
        return cls(
            hotel_id=item.hotel_id,
            room_id=item.room_id,
            check_in_date=item.check_in_date.date().isoformat(),
            check_out_date=item.check_out_date.date().isoformat(),
            guests=item.guests,
            rooms=item.rooms,
            guest_info=guest_info,
            special_requests=special_requests,
            payment_method=payment_method,
        )


class Booking(BookingBaseModel):
    """Confirmed reservation."""

    id: str
    booking_reference: str = Field(alias="bookingReference")
    hotel_id: str = Field(alias="hotelId")
    room_id: str | None = Field(None, alias="roomId")
    check_in_date: datetime = Field(alias="checkInDate")
    check_out_date: datetime = Field(alias="checkOutDate")
    nights: int
    adults: int = 1
    children: int | None = None
    rooms: int = 1
    room_total: float = Field(alias="roomTotal")
    taxes: float = 0.0
    fees: float = 0.0
    total_amount: float = Field(alias="totalAmount")
    currency: str = "USD"
    status: BookingStatus = BookingStatus.PENDING
    payment_status: PaymentStatus = Field(PaymentStatus.PENDING, alias="paymentStatus")
    api_provider: str | None = Field(None, alias="apiProvider")
    external_booking_id: str | None = Field(None, alias="externalBookingId")
    special_requests: str | None = Field(None, alias="specialRequests")
    cancellation_reason: str | None = Field(None, alias="cancellationReason")
